#!/usr/bin/env python3
"""
CPI Wrap module entry point
Allows running: python3 -m cpiwrap cpilint|flashpipe <command> [options]
"""

import sys

if __name__ == '__main__':
    if len(sys.argv) > 1 and sys.argv[1] == 'flashpipe':
        from cpiwrap.cli import flashpipe_main as main
        sys.argv.pop(1)
    elif len(sys.argv) > 1 and sys.argv[1] == 'cpilint':
        from cpiwrap.cli import cpilint_main as main
        sys.argv.pop(1)
    else:
        print("Usage: python3 -m cpiwrap cpilint|flashpipe <command> [options]", file=sys.stderr)
        sys.exit(1)
    main()
