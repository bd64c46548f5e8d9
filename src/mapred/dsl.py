# dsl.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from .job import Job
from .model import WalkSpec
from .phase import PhaseFunction


# ---------------------------------------------------------------------
# Phase helpers
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class PhaseOptions:
    """
    Everything needed to add one phase to a Job.

    Not a Phase itself: phases only come into being inside a Job, so
    these are replayed onto one by mapreduce() / JobBuilder.build().
    """
    kind: str
    function: Optional[PhaseFunction] = None
    language: Optional[str] = None
    keep: bool = False
    arg: Any = None

    def options(self) -> Dict[str, Any]:
        opts: Dict[str, Any] = {"keep": self.keep}
        if self.language is not None:
            opts["language"] = self.language
        if self.arg is not None:
            opts["arg"] = self.arg
        return opts

    def apply(self, job: Job) -> Job:
        if self.kind == "link":
            spec = self.function if self.function is not None else WalkSpec()
            return job.link(spec, **self.options())
        adder = job.map if self.kind == "map" else job.reduce
        return adder(**self.options(), function=self.function)


def map_phase(function: PhaseFunction, *, keep: bool = False, arg: Any = None,
              language: Optional[str] = None) -> PhaseOptions:
    return PhaseOptions("map", function, language=language, keep=keep, arg=arg)


def reduce_phase(function: PhaseFunction, *, keep: bool = False, arg: Any = None,
                 language: Optional[str] = None) -> PhaseOptions:
    return PhaseOptions("reduce", function, language=language, keep=keep, arg=arg)


def link_phase(bucket: Optional[str] = None, tag: Optional[str] = None, *,
               keep: bool = False, arg: Any = None) -> PhaseOptions:
    """Follow links, optionally limited to a bucket and/or tag."""
    return PhaseOptions("link", WalkSpec.from_values(bucket, tag, False), keep=keep, arg=arg)


# ---------------------------------------------------------------------
# Functional Job helper
# ---------------------------------------------------------------------

def mapreduce(
    inputs: Any,
    *phases: PhaseOptions,
    phases_list: Optional[List[PhaseOptions]] = None,
) -> Job:
    """
    Build a Job in one expression.

        mapreduce(
            "logs",
            map_phase("function(v){ return [1]; }"),
            reduce_phase(["riak_kv_mapreduce", "reduce_sum"], keep=True),
        )

    inputs is anything Job.add() accepts as one argument, or a list of
    (bucket, key[, keydata]) tuples.
    """
    j = Job()
    for entry in _input_entries(inputs):
        j.add(entry)

    for p in list(phases_list or []) + list(phases):
        p.apply(j)
    return j


def _input_entries(inputs: Any) -> Iterable[Any]:
    # a list of tuples is several inputs; anything else is a single one
    if isinstance(inputs, list) and all(isinstance(e, (list, tuple)) for e in inputs):
        return inputs
    return [inputs]


# ---------------------------------------------------------------------
# Builder API
# ---------------------------------------------------------------------

class JobBuilder:
    def __init__(self):
        self._inputs: list = []
        self._phases: list[PhaseOptions] = []

    def over_bucket(self, bucket):
        self._inputs.append(bucket)
        return self

    def over_key(self, bucket, key: str, keydata: Any = None):
        entry = (bucket, key) if keydata is None else (bucket, key, keydata)
        self._inputs.append(entry)
        return self

    def map(self, function: PhaseFunction, **options):
        self._phases.append(map_phase(function, **options))
        return self

    def reduce(self, function: PhaseFunction, **options):
        self._phases.append(reduce_phase(function, **options))
        return self

    def link(self, bucket: Optional[str] = None, tag: Optional[str] = None, **options):
        self._phases.append(link_phase(bucket, tag, **options))
        return self

    def build(self) -> Job:
        if not self._phases:
            raise ValueError("map-reduce job has no phases")

        j = Job()
        for entry in self._inputs:
            j.add(entry)
        for p in self._phases:
            p.apply(j)
        return j


def build() -> JobBuilder:
    """Convenience: build().over_bucket('logs').map(...).build()"""
    return JobBuilder()
