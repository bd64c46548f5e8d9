from __future__ import annotations
import os

JOB_FILE = os.environ.get("MAPRED_JOB_FILE", "mapred_job.py")
JSON_INDENT = int(os.environ.get("MAPRED_JSON_INDENT", "2"))
