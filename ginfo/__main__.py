#!/usr/bin/env python
# Copyright 2006--2007-01-21 Paul Sladen
# http://www.paul.sladen.org/projects/compression/
#
# You may use and distribute this code under any DFSG-compatible
# license (eg. BSD, GNU GPLv2).

import argparse
import logging
import os
import sys
import typing as T

from ginfo import GinfoError, inspect
from ginfo.source import read_header_from_file, read_header_from_stdin

LOGLEVEL_ENV = "GINFO_LOGLEVEL"


def _setup_logging() -> None:
    # add timestamp, level name from the environment
    fmt = "%(asctime)s %(levelname)s: %(message)s"
    name = os.environ.get(LOGLEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=fmt)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ginfo",
        description="Display the fixed header fields of a GZip file.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="the file to read from; standard input when omitted or '-'",
    )
    parser.add_argument(
        "-b",
        "--base64",
        dest="is_base64",
        action="store_true",
        help="read the input as base64 encoded",
    )
    return parser


def main(
    argv: T.Optional[T.List[str]] = None,
    stdin: T.Any = None,
    stdout: T.Optional[T.TextIO] = None,
) -> int:
    args = _parser().parse_args(argv)
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout

    try:
        if args.file is None or args.file == "-":
            header = read_header_from_stdin(stdin, args.is_base64)
        else:
            header = read_header_from_file(args.file, args.is_base64)
    except (GinfoError, OSError) as e:
        logging.getLogger("ginfo").debug("input failed", exc_info=True)
        sys.stderr.write("ginfo: error: %s\n" % e)
        return 1

    for line in inspect(header):
        stdout.write(line + "\n")
    return 0


def _main() -> None:
    _setup_logging()
    sys.exit(main())


if __name__ == "__main__":
    _main()
