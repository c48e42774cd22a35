"""Use cases composed by the runtime: pipeline, sort, and the sample run."""

from __future__ import annotations

from .demo import run_demo, sample_flora
from .pipeline import LogPipeline
from .sort import by_name, sort_async

__all__ = ["LogPipeline", "by_name", "run_demo", "sample_flora", "sort_async"]
