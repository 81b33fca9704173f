"""
CPI Wrap - SAP Integration Suite tool wrappers
Command-line wrappers for CPILint and FlashPipe driven by local Git state.
"""

__version__ = "1.0.0"
__author__ = "Vadim Klimov"
__license__ = "MIT"

__all__ = ["__version__"]
