"""
Shared fixtures for CPI Wrap tests
"""
import os
import shutil
import stat
import subprocess
from pathlib import Path

import pytest

requires_git = pytest.mark.skipif(shutil.which('git') is None, reason="git is not installed")


CPILINT_STUB = """#!/bin/sh
echo "cwd: $PWD" >> "$STUB_LOG"
echo "cpilint $*" >> "$STUB_LOG"
for f in $4; do echo "file: $f" >> "$STUB_LOG"; done
exit ${STUB_EXIT:-0}
"""

FLASHPIPE_STUB = """#!/bin/sh
echo "cwd: $PWD" >> "$STUB_LOG"
echo "flashpipe $*" >> "$STUB_LOG"
exit ${STUB_EXIT:-0}
"""


def _write_executable(path: Path, content: str):
    path.write_text(content)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


@pytest.fixture
def stub_log(tmp_path, monkeypatch):
    """File the stub tools append their invocations to"""
    log = tmp_path / 'stub.log'
    log.touch()
    monkeypatch.setenv('STUB_LOG', str(log))
    monkeypatch.delenv('STUB_EXIT', raising=False)
    return log


@pytest.fixture
def stub_tools(tmp_path, monkeypatch, stub_log):
    """Put stub cpilint and flashpipe executables first on PATH"""
    bin_dir = tmp_path / 'bin'
    bin_dir.mkdir()
    _write_executable(bin_dir / 'cpilint', CPILINT_STUB)
    _write_executable(bin_dir / 'flashpipe', FLASHPIPE_STUB)
    monkeypatch.setenv('PATH', f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.delenv('VIRTUAL_ENV', raising=False)
    return bin_dir


def git(repo: Path, *args: str) -> str:
    """Run git in repo and return stdout"""
    return subprocess.run(
        ['git', *args], cwd=repo, capture_output=True, text=True, check=True
    ).stdout


@pytest.fixture
def git_repo(tmp_path):
    """Empty Git repository with a committer identity"""
    repo = tmp_path / 'repo'
    repo.mkdir()
    git(repo, 'init')
    git(repo, 'config', 'user.email', 'dev@example.com')
    git(repo, 'config', 'user.name', 'Dev')
    git(repo, 'config', 'commit.gpgsign', 'false')
    return repo


def write_file(root: Path, relative: str, content: str = 'content') -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path
