#!/usr/bin/env python

"""
Bitfield reader for the fixed GZip header. Data is read from a file-like
object, least significant bit first, so multi-byte fields come out
little-endian the way RFC 1952 stores them:

    +---+---+---+---+---+---+---+---+---+---+
    |ID1|ID2|CM |FLG|     MTIME     |XFL|OS |
    +---+---+---+---+---+---+---+---+---+---+

Reading ``readbits(16)`` at the start of a GZip stream therefore gives
0x8b1f, and ``readbits(32)`` over MTIME gives the timestamp directly.
"""

# Copyright 2006--2007-01-21 Paul Sladen
# http://www.paul.sladen.org/projects/compression/
#
# You may use and distribute this code under any DFSG-compatible
# license (eg. BSD, GNU GPLv2).

import typing as T
import logging


class LengthError(Exception):
    """Exception raised when the end of the stream is reached."""


class Bitfield:
    """
    Little-endian bit reader over a binary file-like object.
    """

    def __init__(self, x: T.BinaryIO) -> None:
        self.f = x
        self.bits = 0
        self.bitfield = 0x0
        self.count = 0

    def _read(self, n: int) -> bytes:
        """Read n bytes from the file-like object."""
        s = self.f.read(n)
        if not s:
            raise LengthError("stream ended after %d bytes" % self.count)
        self.count += len(s)
        return s

    def _needbits(self, n: int) -> None:
        """Pull in whole bytes until at least n bits are buffered."""
        while self.bits < n:
            self._more()

    @staticmethod
    def _mask(n: int) -> int:
        """Return a mask of n bits."""
        return (1 << n) - 1

    def tell(self) -> T.Tuple[int, int]:
        """Return the current position as (bytes, bits).

        The first integer is the number of whole bytes consumed from the
        file-like object, the second the bit offset within the next one.
        """
        return self.count - ((self.bits + 7) >> 3), 7 - (
            (self.bits - 1) & 0b111
        )

    def _more(self) -> None:
        c = self._read(1)
        self.bitfield += ord(c) << self.bits
        self.bits += 8

    def readbits(self, n: int = 8) -> int:
        """Read n bits from the file-like object."""
        if n > self.bits:
            self._needbits(n)
        r = self.bitfield & self._mask(n)
        self.bits -= n
        self.bitfield >>= n
        return r


import unittest
import io


class TestBitfield(unittest.TestCase):
    """
    Test cases for the Bitfield class.
    """

    def test_magic_is_little_endian(self) -> None:
        """
        The two GZip magic bytes read as a single 16-bit field come out
        as 0x8b1f, and the position moves by two whole bytes.
        """
        b = Bitfield(io.BytesIO(b"\x1f\x8b"))
        self.assertEqual(b.readbits(16), 0x8B1F)
        self.assertEqual(b.tell(), (2, 0))

    def test_read_u32(self) -> None:
        b = Bitfield(io.BytesIO(bytes([0x80, 0xC5, 0x99, 0x64])))
        self.assertEqual(b.readbits(32), 0x6499C580)

    def test_partial_bits(self) -> None:
        b = Bitfield(io.BytesIO(b"\x01"))
        self.assertEqual(b.readbits(1), 1)
        self.assertEqual(b.tell(), (0, 1))
        self.assertEqual(b.readbits(1), 0)
        self.assertEqual(b.tell(), (0, 2))

    def test_length_error(self) -> None:
        """
        Reading past the end of the stream raises LengthError rather than
        padding the field with zeros.
        """
        b = Bitfield(io.BytesIO(b"\x1f\x8b\x08"))
        b.readbits(16)
        with self.assertRaises(LengthError):
            b.readbits(16)


if __name__ == "__main__":  # pragma: no cover
    logging.basicConfig(level=logging.DEBUG)
    unittest.main()  # pragma: no cover
