# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import abc

from abc import abstractmethod

from mp3parser.conversion import *
from mp3parser.errors import *
import mp3parser.text as text

# The idea for the Spec system comes from Mutagen.

def optionalspec(spec):
    spec._optional = True
    return spec

class Spec(metaclass=abc.ABCMeta):
    """A named field of a frame body.

    read(frame, data) decodes the field from the front of data and returns
    (value, rest).  It raises EOFError if data is too short for the field.
    """
    def __init__(self, name):
        self.name = name

    _optional = False

    @abstractmethod
    def read(self, frame, data): pass

    def to_str(self, value):
        return "{0}={1}".format(self.name, repr(value))

class ByteSpec(Spec):
    def read(self, frame, data):
        if len(data) < 1:
            raise EOFError()
        return data[0], data[1:]

class IntegerSpec(Spec):
    def __init__(self, name, width):
        super().__init__(name)
        self.width = width
    def read(self, frame, data):
        if len(data) < self.width:
            raise EOFError()
        return Int8.decode(data[:self.width]), data[self.width:]

class SignedIntegerSpec(Spec):
    def __init__(self, name, width):
        super().__init__(name)
        self.width = width
    def read(self, frame, data):
        if len(data) < self.width:
            raise EOFError()
        val = Int8.decode(data[:self.width])
        if data[0] & 0x80:
            # Negative value
            val -= (1 << (self.width << 3))
        return val, data[self.width:]

class VarIntSpec(Spec):
    "An integer prefixed by its width in bits."
    def read(self, frame, data):
        if len(data) == 0:
            raise EOFError()
        bits = data[0]
        data = data[1:]
        width = (bits + 7) >> 3
        if len(data) < width:
            raise EOFError()
        return Int8.decode(data[:width]), data[width:]

class BinaryDataSpec(Spec):
    def read(self, frame, data):
        return bytes(data), bytes()
    def to_str(self, value):
        return '{0}={1}{2}'.format(self.name, value[0:16], "..." if len(value) > 16 else "")

class SimpleStringSpec(Spec):
    def __init__(self, name, length):
        super().__init__(name)
        self.length = length
    def read(self, frame, data):
        if len(data) < self.length:
            raise EOFError()
        return data[:self.length].decode('iso-8859-1'), data[self.length:]

class LanguageSpec(SimpleStringSpec):
    def __init__(self, name):
        super().__init__(name, 3)

class NullTerminatedStringSpec(Spec):
    def read(self, frame, data):
        rawstr, sep, data = data.partition(b"\x00")
        return rawstr.decode('iso-8859-1'), data

class URLStringSpec(Spec):
    "A Latin-1 URL that runs to the end of the frame."
    def read(self, frame, data):
        if data[:1] == b"\x00" and len(data) > 1:
            # iTunes prepends an extra null byte to WFED frames (encoding spec?)
            data = data[1:]
        return bytes(data).rstrip(b"\x00").decode('iso-8859-1'), bytes()

class EncodingSpec(ByteSpec):
    "EncodingSpec must be the first spec."
    def read(self, frame, data):
        enc, data = super().read(frame, data)
        if enc & 0xFC:
            raise InvalidTextEncodingError("Invalid encoding 0x{0:X}".format(enc))
        return enc, data
    def to_str(self, value):
        return text.encodings[value][0]

class EncodedStringSpec(Spec):
    "A terminated string in the frame's encoding."
    def read(self, frame, data):
        rawstr, data = text.split_terminated(data, frame.encoding)
        return text.decode(rawstr, frame.encoding), data

class EncodedFullTextSpec(EncodedStringSpec):
    "Text that runs to the end of the frame; trailing terminators are dropped."
    def read(self, frame, data):
        rawstr = text.strip_terminators(data, frame.encoding)
        return text.decode(rawstr, frame.encoding), bytes()

class EncodedStringListSpec(Spec):
    "All the terminated strings up to the end of the frame, as a list."
    def read(self, frame, data):
        return [text.decode(rawstr, frame.encoding)
                for rawstr in text.split_all(data, frame.encoding)], bytes()

class MultiSpec(Spec):
    def __init__(self, name, *specs):
        super().__init__(name)
        self.specs = specs

    def read(self, frame, data):
        seq = []
        while data:
            record = []
            for s in self.specs:
                elem, data = s.read(frame, data)
                record.append(elem)
            seq.append(tuple(record))
        return seq, data

class ASPISpec(Spec):
    "A list of frame.N integers whose width depends on frame.b."
    def read(self, frame, data):
        width = 1 if frame.b == 8 else 2
        value = []
        if len(data) < width * frame.N:
            raise EOFError
        for i in range(frame.N):
            value.append(Int8.decode(data[:width]))
            data = data[width:]
        return value, data
