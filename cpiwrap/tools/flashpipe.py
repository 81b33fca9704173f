#!/usr/bin/env python3
"""
CPI Wrap FlashPipe Tool
Snapshot and synchronisation between a tenant and a Git repository

Reference: https://github.com/engswee/flashpipe
"""

import subprocess
from pathlib import Path
from typing import List, Optional

from cpiwrap.tools.base import BaseTool


class FlashPipeTool(BaseTool):
    """The CI/CD Companion for SAP Integration Suite"""

    URL = "https://github.com/engswee/flashpipe"

    SNAPSHOT_COMMIT_MESSAGE = "Tenant workspace snapshot"

    def get_tool_name(self) -> str:
        return "flashpipe"

    def get_install_instructions(self) -> str:
        return (
            "Install FlashPipe:\n"
            f"  Download a release from {self.URL}/releases\n"
            "  and add the flashpipe binary to PATH"
        )

    def snapshot(self, config_file: Path, commit_message: str = SNAPSHOT_COMMIT_MESSAGE,
                 cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
        """Snapshot the tenant workspace into the Git repository at cwd"""
        cmd = self._command(
            'snapshot',
            '--config', str(config_file),
            '--git-commit-msg', commit_message,
        )
        return self._run_command(cmd, cwd=cwd)

    def sync_command(self, config_file: Path, package: str) -> List[str]:
        """
        Build the command synchronising one package directory to the tenant

        Args:
            config_file: FlashPipe configuration file
            package: Package ID, also the package directory in the repository

        Returns:
            Command and arguments
        """
        return self._command(
            'sync',
            '--config', str(config_file),
            '--target', 'tenant',
            '--package-id', package,
            '--dir-git-repo', package,
        )

    def sync(self, config_file: Path, package: str,
             cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
        """Synchronise one package directory (relative to cwd) to the tenant"""
        return self._run_command(self.sync_command(config_file, package), cwd=cwd)
