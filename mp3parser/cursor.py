# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Bounds-checked, read-only access to an in-memory byte buffer."""

from mp3parser.errors import *
from mp3parser.conversion import Syncsafe, Int8

class ByteCursor:
    """A read-only view over a byte buffer with an absolute position.

    The positional readers (uint8, uint16, ..., slice) take an explicit
    offset and never move the cursor; read() and skip() consume bytes from
    the current position.  The buffer is never modified.
    """
    def __init__(self, data, pos=0):
        self.data = data
        self.pos = pos

    def __len__(self):
        return len(self.data)

    @property
    def remaining(self):
        return max(0, len(self.data) - self.pos)

    def _check(self, pos, width):
        if pos < 0 or width < 0 or pos + width > len(self.data):
            raise OutOfBoundsError(
                "Read of {0} bytes at offset {1} exceeds buffer of {2} bytes"
                .format(width, pos, len(self.data)))

    def slice(self, pos, length):
        "Return exactly length bytes starting at pos."
        self._check(pos, length)
        return bytes(self.data[pos:pos + length])

    def uint(self, pos, width):
        return Int8.decode(self.slice(pos, width))

    def uint8(self, pos):
        self._check(pos, 1)
        return self.data[pos]

    def uint16(self, pos):
        return self.uint(pos, 2)

    def uint24(self, pos):
        return self.uint(pos, 3)

    def uint32(self, pos):
        return self.uint(pos, 4)

    def syncsafe32(self, pos):
        "Decode the 28-bit syncsafe integer stored in the 4 bytes at pos."
        return Syncsafe.decode(self.slice(pos, 4))

    def read(self, length):
        "Read exactly length bytes; raise OutOfBoundsError if the buffer ends sooner."
        data = self.slice(self.pos, length)
        self.pos += length
        return data

    def skip(self, length):
        self._check(self.pos, length)
        self.pos += length

    def find(self, sub, start=0, end=None):
        if end is None:
            end = len(self.data)
        if isinstance(self.data, memoryview):
            # memoryview has no find()
            return bytes(self.data).find(sub, start, end)
        return self.data.find(sub, start, end)
