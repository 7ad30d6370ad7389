"""Job-level agent utilities (configuration, runner)."""

from .config import JobConfig
from .task_runner import build_job, run_chat, run_job

__all__ = ["JobConfig", "build_job", "run_chat", "run_job"]
