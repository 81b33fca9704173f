#!/usr/bin/env python3
"""
CPI Wrap Parallel Runner
Run independent tasks concurrently and wait for all of them

Tasks spawn external processes, so a thread pool is enough: the work
happens in the child processes, threads only wait on them.
"""

from dataclasses import dataclass
from multiprocessing.pool import ThreadPool
from typing import Any, Callable, List, Optional, Sequence, Tuple

from cpiwrap.errors import WrapperError


@dataclass
class TaskResult:
    """Outcome of a single parallel task"""
    name: str
    success: bool
    returncode: Optional[int] = None
    error: Optional[str] = None


Task = Tuple[str, Callable[[], Any]]


def _run_task(task: Task) -> TaskResult:
    name, func = task
    try:
        returncode = func()
    except WrapperError as e:
        return TaskResult(name=name, success=False, error=e.format_message())
    except Exception as e:
        return TaskResult(name=name, success=False, error=str(e))

    if isinstance(returncode, int) and returncode != 0:
        return TaskResult(name=name, success=False, returncode=returncode,
                          error=f"exit status {returncode}")
    return TaskResult(name=name, success=True, returncode=returncode)


def run_parallel(tasks: Sequence[Task], workers: Optional[int] = None) -> List[TaskResult]:
    """
    Run tasks concurrently and wait until every one has finished

    A failing task does not stop the others.

    Args:
        tasks: (name, callable) pairs; an int returned by a callable is its exit status
        workers: Maximum concurrent tasks (default: one per task)

    Returns:
        Task results in submission order
    """
    if not tasks:
        return []

    if workers is None or workers > len(tasks):
        workers = len(tasks)
    workers = max(1, workers)

    with ThreadPool(processes=workers) as pool:
        return pool.map(_run_task, tasks)


def failed(results: List[TaskResult]) -> List[TaskResult]:
    """Results of tasks that did not succeed"""
    return [r for r in results if not r.success]
