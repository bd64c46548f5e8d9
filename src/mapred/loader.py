# loader.py
from __future__ import annotations

import runpy
from pathlib import Path

from .job import Job


def load_job(path: str | Path) -> Job:
    """
    Load a map-reduce job from a python file path.

    The file must define either:
      - job() -> Job
      - JOB = Job(...)

    Returns:
      Job
    """
    job_path = Path(path).expanduser().resolve()
    if not job_path.exists():
        raise FileNotFoundError(f"Job file not found: {job_path}")
    if job_path.suffix != ".py":
        raise ValueError(f"Job file must be a .py file, got: {job_path.name}")

    module_name = f"mapred_job_{job_path.stem}"
    globals_dict = runpy.run_path(str(job_path), run_name=module_name)

    loaded = None
    if "job" in globals_dict and callable(globals_dict["job"]):
        loaded = globals_dict["job"]()
    elif "JOB" in globals_dict:
        loaded = globals_dict["JOB"]

    if not isinstance(loaded, Job):
        raise TypeError(
            "Job file must return/define a Job. "
            "Define job() -> Job or JOB = Job(...)."
        )

    return loaded
