# mapred_job.py
# Example job: find who wrote a few documents and list their names, sorted.
from __future__ import annotations
from mapred import mapreduce, map_phase, reduce_phase, link_phase


def job():
    return mapreduce(
        [("docs", "intro"), ("docs", "faq"), ("docs", "changelog", {"lang": "en"})],

        # Follow "author" links out of each document
        link_phase("people", "author"),

        # Emit each author's name
        map_phase("function(v) { return [JSON.parse(v.values[0].data).name]; }"),

        # Drop duplicates with a stored function
        reduce_phase({"bucket": "mr_functions", "key": "unique"}),

        # Sort with a built-in Erlang reduce and return the result
        reduce_phase(["riak_kv_mapreduce", "reduce_sort"], keep=True),
    )
