#!/usr/bin/env python3
"""
CPI Wrap Git helpers
Read working tree state (staged files, latest commit) through the git CLI
"""

import shutil
import subprocess
from pathlib import Path
from typing import Iterable, List

from cpiwrap.errors import WrapperError


def group_paths(paths: Iterable[str], depth: int) -> List[str]:
    """
    Reduce file paths to their unique leading components

    Equivalent of `cut -d '/' -f1..depth | sort --unique`: paths with fewer
    components than depth are kept whole.

    Args:
        paths: Repository-relative file paths ('/' separated)
        depth: Number of leading components to keep

    Returns:
        Sorted list of unique prefixes
    """
    prefixes = set()
    for path in paths:
        if not path:
            continue
        prefixes.add('/'.join(path.split('/')[:depth]))
    return sorted(prefixes)


class GitRepository:
    """Git working tree rooted at (or containing) a directory"""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        if shutil.which('git') is None:
            raise WrapperError("git is not installed")
        try:
            return subprocess.run(
                ['git', *args],
                cwd=self.path,
                capture_output=True,
                text=True,
                check=check
            )
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or '').strip()
            raise WrapperError(f"git {args[0]} failed: {detail or e.returncode}") from e

    @staticmethod
    def _lines(output: str) -> List[str]:
        return [line.strip() for line in output.splitlines() if line.strip()]

    def is_work_tree(self) -> bool:
        """True if the directory is inside a Git working tree"""
        result = self._run('rev-parse', '--is-inside-work-tree', check=False)
        return result.returncode == 0 and result.stdout.strip() == 'true'

    def init(self):
        """Create an empty repository in the directory"""
        self._run('init')

    def staged_files(self) -> List[str]:
        """Files in the staging area"""
        return self._lines(self._run('diff', '--staged', '--name-only').stdout)

    def latest_commit_files(self) -> List[str]:
        """Files changed by the latest commit (HEAD)"""
        return self._lines(self._run('show', '--name-only', '--pretty=format:').stdout)
