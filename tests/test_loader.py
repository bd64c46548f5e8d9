from __future__ import annotations

import textwrap

import pytest

from mapred.loader import load_job


def _write(tmp_path, name, body):
    path = tmp_path / name
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


def test_loads_job_function(tmp_path):
    path = _write(tmp_path, "word_count.py", """
        from mapred import Job

        def job():
            return Job().add("docs").map("function(v){return [1];}")
    """)
    j = load_job(path)
    assert j.inputs == "docs"
    assert [p.kind for p in j.phases] == ["map"]


def test_loads_job_constant(tmp_path):
    path = _write(tmp_path, "const_job.py", """
        from mapred import mapreduce, reduce_phase

        JOB = mapreduce([("b", "k")], reduce_phase(["m", "f"]))
    """)
    assert load_job(str(path)).inputs == [["b", "k"]]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_job(tmp_path / "nope.py")


def test_requires_python_file(tmp_path):
    path = _write(tmp_path, "job.json", "{}")
    with pytest.raises(ValueError, match=r"\.py"):
        load_job(path)


def test_requires_a_job(tmp_path):
    path = _write(tmp_path, "empty_job.py", """
        def job():
            return {"inputs": "b", "query": []}
    """)
    with pytest.raises(TypeError, match="must return/define a Job"):
        load_job(path)


def test_invalid_phase_propagates(tmp_path):
    path = _write(tmp_path, "bad_job.py", """
        from mapred import Job

        JOB = Job().add("b").map({"bucket": "only"})
    """)
    with pytest.raises(ValueError, match="'bucket' and 'key'"):
        load_job(path)
