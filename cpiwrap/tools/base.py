#!/usr/bin/env python3
"""
CPI Wrap Base Tool Class
Abstract base class for the wrapped command-line tools
"""

import os
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from cpiwrap.errors import WrapperError


class BaseTool(ABC):
    """
    Abstract base class for wrapped tools

    Each tool implements:
    - Tool name (which executable to look for)
    - Install instructions (shown when the executable is missing)
    - Command builders for its sub-commands
    """

    def __init__(self):
        self.tool_name = self.get_tool_name()
        self.tool_path = self._find_tool()

    @abstractmethod
    def get_tool_name(self) -> str:
        """
        Return the name of the CLI tool
        Example: 'cpilint', 'flashpipe'
        """
        pass

    @abstractmethod
    def get_install_instructions(self) -> str:
        """Human-readable install instructions for the tool"""
        pass

    def is_available(self) -> bool:
        """True if the tool executable was found"""
        return self.tool_path is not None

    def require(self):
        """
        Make sure the tool can be run

        Raises:
            WrapperError: If the executable is not installed
        """
        if not self.is_available():
            raise WrapperError(
                f"{self.tool_name} is not installed\n{self.get_install_instructions()}"
            )

    def _find_tool(self) -> Optional[Path]:
        """
        Find the tool in the active virtual environment or system PATH

        Returns:
            Path to tool executable, or None if not found
        """
        # VIRTUAL_ENV is set when a venv is activated, sys.prefix differs otherwise
        venv_path = os.getenv('VIRTUAL_ENV')
        if not venv_path and sys.prefix != sys.base_prefix:
            venv_path = sys.prefix

        if venv_path:
            venv_bin = Path(venv_path) / 'bin' / self.tool_name
            if venv_bin.exists() and os.access(str(venv_bin), os.X_OK):
                return venv_bin

        tool_path = shutil.which(self.tool_name)
        return Path(tool_path) if tool_path else None

    def _command(self, *args: str) -> List[str]:
        """Full command line for the tool"""
        return [str(self.tool_path or self.tool_name), *args]

    def _run_command(self, cmd: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
        """
        Run a command with output streamed to the terminal

        Args:
            cmd: Command and arguments to run
            cwd: Working directory (default: current directory)

        Returns:
            CompletedProcess result
        """
        self.require()
        try:
            return subprocess.run(cmd, cwd=cwd, check=False)
        except OSError as e:
            raise WrapperError(f"Cannot run {self.tool_name}: {e}") from e
