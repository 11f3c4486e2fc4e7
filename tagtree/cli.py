"""
Interactive front end for building tag trees.

Inputs:
    Commands on stdin, one per line:
        load <path> | run <id> | change <id> <file> <accesses> | quit
Outputs:
    Command results on stdout, 'ERROR: ...' lines on stderr, and with
    --export one gains_<id>.csv per run under --results_dir.
Usage:
    python -m tagtree --load data/files.txt --export
"""

import argparse
import os
import sys

from .session import Session

# ---------------------
# Configuration
# ---------------------
DATA_DIR = "data"
RESULTS_DIR = os.path.join(DATA_DIR, "results")
ERROR_PREFIX = "ERROR: "


def report(result):
    """Print a CommandResult the way the command loop shows it."""
    if result.ok:
        if result.message is not None:
            print(result.message)
    else:
        print(ERROR_PREFIX + result.message, file=sys.stderr)


def command_loop(session, stream):
    session.running = True
    for line in stream:
        report(session.execute(line.rstrip("\r\n")))
        if not session.running:
            break


def main(argv=None, stdin=None):
    """Parse flags, preload any files, then serve commands from stdin."""
    parser = argparse.ArgumentParser(prog="tagtree")
    parser.add_argument(
        "--load",
        type=str,
        nargs="*",
        default=[],
        help="Item files to load before reading commands",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Write the gain report of every run as CSV",
    )
    parser.add_argument(
        "--results_dir",
        type=str,
        default=RESULTS_DIR,
        help=f"Where exported gain reports go (default: {RESULTS_DIR})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print tree building progress to stderr",
    )
    args = parser.parse_args(argv)

    session = Session(
        verbose=args.verbose,
        export_dir=args.results_dir if args.export else None,
    )
    for path in args.load:
        report(session.load(path))

    command_loop(session, stdin if stdin is not None else sys.stdin)
    return 0
