"""
CPI Wrap Core Module
Parallel execution and iFlow packaging
"""

from cpiwrap.core.parallel import TaskResult, run_parallel
from cpiwrap.core.iflows import zip_iflow

__all__ = ["TaskResult", "run_parallel", "zip_iflow"]
