from .dsl import mapreduce, map_phase, reduce_phase, link_phase, JobBuilder, PhaseOptions, build
from .job import Job
from .loader import load_job
from .model import Bucket, RObject, WalkSpec
from .phase import Phase

__all__ = [
    "mapreduce", "map_phase", "reduce_phase", "link_phase", "JobBuilder", "PhaseOptions", "build",
    "Job", "Phase", "Bucket", "RObject", "WalkSpec", "load_job",
]
