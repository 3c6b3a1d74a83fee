#!/usr/bin/env python
# Copyright 2006--2007-01-21 Paul Sladen
# http://www.paul.sladen.org/projects/compression/
#
# You may use and distribute this code under any DFSG-compatible
# license (eg. BSD, GNU GPLv2).
#
# Stand-alone GZip header inspector. Only the fixed 10-byte member header
# is looked at; optional fields and the DEFLATE payload are left alone.

import io
import types
import datetime
import typing as T

from ginfo.bit import Bitfield
from ginfo.log import log

HEADER_SIZE = 10
GZIP_MAGIC = 0x8B1F  # 1f 8b, read little-endian

OS_NAMES = types.MappingProxyType(
    {
        0: "FAT filesystem (MS-DOS, Windows NT/9x)",
        1: "Amiga",
        2: "VMS (or OpenVMS)",
        3: "Unix",
        4: "VM/CMS",
        5: "Atari TOS",
        6: "HPFS filesystem (OS/2, NT)",
        7: "Macintosh",
        8: "Z-System",
        9: "CP/M",
        10: "TOPS-20",
        11: "NTFS filesystem (Windows NT)",
        12: "QDOS",
        13: "Acorn RISCOS",
        255: "unknown",
    }
)
OS_OTHER = "other"


class GinfoError(Exception):
    """Base class for input errors that stop an inspection."""


class TruncatedHeaderError(GinfoError):
    """Fewer than HEADER_SIZE bytes were available."""


class InvalidBase64Error(GinfoError):
    """Input given as base64 could not be decoded."""


class GzipHeaderReport(T.NamedTuple):
    is_valid: bool
    compression_method: T.Optional[int] = None
    flags: T.Optional[int] = None
    modification_time: T.Optional[int] = None
    # XFL is read so the OS byte stays at offset 9, but never reported
    extra_flags: T.Optional[int] = None
    os_code: T.Optional[int] = None


INVALID = GzipHeaderReport(is_valid=False)


def os_name(code: int) -> str:
    return OS_NAMES.get(code, OS_OTHER)


def format_flags(flags: int) -> str:
    return format(flags, "08b")


def format_mtime(mtime: int) -> str:
    """Render MTIME as UTC calendar time. Zero is shown as the epoch."""
    when = datetime.datetime.fromtimestamp(mtime, tz=datetime.timezone.utc)
    return when.strftime("%Y-%m-%d %H:%M:%S")


def decode(header: bytes) -> GzipHeaderReport:
    """Decode the fixed GZip member header.

    ``header`` must be exactly HEADER_SIZE bytes. When the magic does not
    match, the invalid report is returned and nothing after it is read.
    """
    if len(header) < HEADER_SIZE:
        raise TruncatedHeaderError(
            "need %d header bytes, got %d" % (HEADER_SIZE, len(header))
        )
    if len(header) > HEADER_SIZE:
        raise ValueError(
            "header must be %d bytes, got %d" % (HEADER_SIZE, len(header))
        )

    b = Bitfield(io.BytesIO(header))
    magic = b.readbits(16)
    if magic != GZIP_MAGIC:
        log("bad magic", hex(magic))
        return INVALID

    method = b.readbits(8)
    log("method", method)
    flags = b.readbits(8)
    log("flags", hex(flags))
    mtime = b.readbits(32)
    log("mtime", hex(mtime))
    extra_flags = b.readbits(8)
    log("extra_flags", hex(extra_flags), "(ignored)")
    os_type = b.readbits(8)
    log("os_type", hex(os_type))
    log("header end", b.tell())

    return GzipHeaderReport(
        is_valid=True,
        compression_method=method,
        flags=flags,
        modification_time=mtime,
        extra_flags=extra_flags,
        os_code=os_type,
    )


def render_report(report: GzipHeaderReport) -> T.List[str]:
    if not report.is_valid:
        return ["Not a valid GZip file."]
    return [
        "Valid GZip file.",
        "Compression Method: %d" % report.compression_method,
        "Flags: %s" % format_flags(report.flags),
        "Modification Time: %s" % format_mtime(report.modification_time),
        "OS: %s" % os_name(report.os_code),
    ]


def inspect(header: bytes) -> T.List[str]:
    return render_report(decode(header))
