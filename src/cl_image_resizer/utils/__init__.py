from .profiling import timed_stage

__all__ = ["timed_stage"]
