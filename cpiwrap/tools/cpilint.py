#!/usr/bin/env python3
"""
CPI Wrap CPILint Tool
Runs CPILint governance rules against packaged iFlows

Reference: https://github.com/mwittrock/cpilint
"""

import subprocess
from pathlib import Path
from typing import Optional

from cpiwrap.tools.base import BaseTool


class CPILintTool(BaseTool):
    """Automated governance of SAP Cloud Integration flows"""

    URL = "https://github.com/mwittrock/cpilint"

    def get_tool_name(self) -> str:
        return "cpilint"

    def get_install_instructions(self) -> str:
        return (
            "Install CPILint:\n"
            f"  Download a release from {self.URL}/releases\n"
            "  and add its bin directory to PATH"
        )

    def inspect(self, rules_file: Path, files: str, cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
        """
        Inspect iFlow archives

        CPILint exits non-zero when it finds rule violations, so the return
        code is handed back to the caller instead of being raised.

        Args:
            rules_file: CPILint rules XML file
            files: File name or glob pattern, expanded by CPILint itself
            cwd: Working directory (default: current directory)

        Returns:
            CompletedProcess result
        """
        cmd = self._command(
            '-rules', str(rules_file),
            '-files', files,
            '-skipvercheck',
        )
        return self._run_command(cmd, cwd=cwd)
