"""Run orchestration and statistics."""

from .runner import HarvestRunner, KeyAssignment, RunReport
from .stats import RunStatistics

__all__ = ["HarvestRunner", "KeyAssignment", "RunReport", "RunStatistics"]
