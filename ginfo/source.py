# Copyright 2006--2007-01-21 Paul Sladen
# http://www.paul.sladen.org/projects/compression/
#
# You may use and distribute this code under any DFSG-compatible
# license (eg. BSD, GNU GPLv2).

"""
Input plumbing: fetch the 10 header bytes from a file or standard input,
either raw or as base64 text.

Base64 read from a terminal or pipe is taken from a single line; base64
read from a file uses the whole file. Either way the decoded payload must
hold at least HEADER_SIZE bytes and only the first HEADER_SIZE are kept.
"""

import base64
import binascii
import typing as T

from ginfo import HEADER_SIZE, InvalidBase64Error, TruncatedHeaderError
from ginfo.log import log


def _read_exact(f: T.BinaryIO, n: int) -> bytes:
    """Read n bytes, retrying short reads; fewer at EOF is an error."""
    data = f.read(n)
    while len(data) < n:
        more = f.read(n - len(data))
        if not more:
            raise TruncatedHeaderError(
                "need %d header bytes, got %d" % (n, len(data))
            )
        data += more
    return data


def _decode_base64(text: bytes) -> bytes:
    text = text.strip()
    try:
        payload = base64.b64decode(text, validate=True)
    except binascii.Error as e:
        raise InvalidBase64Error("invalid base64 input: %s" % e) from e
    # padding bits must be zero, as in canonical encoding
    if base64.b64encode(payload) != text:
        raise InvalidBase64Error("invalid base64 input: non-canonical encoding")
    log("base64 payload", len(payload), "bytes")
    if len(payload) < HEADER_SIZE:
        raise TruncatedHeaderError(
            "decoded base64 holds %d bytes, need %d" % (len(payload), HEADER_SIZE)
        )
    return payload[:HEADER_SIZE]


def read_header(
    f: T.BinaryIO, is_base64: bool = False, single_line: bool = False
) -> bytes:
    """Return exactly HEADER_SIZE raw header bytes from f.

    With ``is_base64`` the stream holds base64 text; ``single_line``
    restricts that text to the first line, as read from standard input.
    """
    if not is_base64:
        return _read_exact(f, HEADER_SIZE)
    text = f.readline() if single_line else f.read()
    return _decode_base64(text)


def read_header_from_file(filename: str, is_base64: bool = False) -> bytes:
    log("reading header from", filename)
    with open(filename, "rb") as f:
        return read_header(f, is_base64)


def read_header_from_stdin(stdin: T.Any, is_base64: bool = False) -> bytes:
    """Read from a text or binary stdin; text streams use their buffer."""
    log("reading header from stdin")
    f = getattr(stdin, "buffer", stdin)
    return read_header(f, is_base64, single_line=True)
