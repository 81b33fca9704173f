#!/usr/bin/env python3
"""
CPI Wrap errors
User-facing failures reported on stderr with exit status 1
"""

from typing import IO, Optional

import click

from cpiwrap.output import err_console


class WrapperError(click.ClickException):
    """Failure that ends a wrapper run with a message on stderr"""

    exit_code = 1

    def show(self, file: Optional[IO] = None) -> None:
        # Plain message, no "Error:" prefix
        if file is not None:
            click.echo(self.format_message(), file=file)
        else:
            err_console.print(self.format_message(), markup=False, highlight=False)
