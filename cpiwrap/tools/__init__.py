"""
CPI Wrap wrapped tools
"""

from cpiwrap.tools.base import BaseTool
from cpiwrap.tools.cpilint import CPILintTool
from cpiwrap.tools.flashpipe import FlashPipeTool

__all__ = ['BaseTool', 'CPILintTool', 'FlashPipeTool']
