# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

from warnings import warn

from mp3parser.errors import *

class Unsync:
    "Removal of unsynchronisation from byte sequences."
    @staticmethod
    def gen_decode(iterable):
        "A generator for de-unsynchronizing a byte iterable."
        sync = False
        for b in iterable:
            if sync and (b & 0xE0) == 0xE0:
                warn("Invalid unsynched data", UnsyncWarning)
            if not (sync and b == 0x00):
                yield b
            sync = (b == 0xFF)

    @staticmethod
    def decode(data):
        """Remove unsynchronization bytes from data.

        Every 0xFF 0x00 pair becomes a single 0xFF.  The result is a new
        bytes object; data itself is left alone.
        """
        return bytes(Unsync.gen_decode(data))

class Syncsafe:
    """Conversion from syncsafe integers.
    Syncsafe integers are big-endian 7-bit byte sequences.
    """
    @staticmethod
    def decode(data):
        "Decodes a syncsafe integer"
        value = 0
        for b in data:
            if b > 127:  # iTunes bug
                raise InvalidSyncSafeByteError(
                    "Invalid syncsafe integer byte 0x{0:02X}".format(b))
            value <<= 7
            value += b
        return value

class Int8:
    """Conversion from binary integer values of any length."""

    @staticmethod
    def decode(data):
        "Decodes an 8-bit big-endian integer of any length"
        value = 0
        for b in data:
            value <<= 8
            value += b
        return value
