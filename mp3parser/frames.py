# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Class definitions for ID3v2 frames and their decoded contents.

A Frame pairs the frame header read from the tag with a FrameContent
instance.  The content classes form a closed family:

  TextInformation  -- T??? frames except TXXX
  UserDefinedText  -- TXXX
  UrlLink          -- W??? frames except WXXX
  UserDefinedUrl   -- WXXX
  Generic          -- other registered frames (see mp3parser.id3)
  Unknown          -- anything else, raw bytes preserved
"""

import abc
import collections

from mp3parser.errors import *
from mp3parser.specs import *
import mp3parser.text as text

class FrameHeader(collections.namedtuple("FrameHeader", "frameid size flags")):
    __slots__ = ()

    @property
    def id(self):
        return self.frameid

class Frame:
    """One ID3v2 frame: its header, decoded content and flags.

    flags is a set of flag names ("compressed", "read_only", ...);
    group is the grouping identity byte, or None.
    """
    def __init__(self, header, content, flags=None, group=None):
        self.header = header
        self.content = content
        self.flags = flags if flags else set()
        self.group = group

    @property
    def frameid(self):
        return self.header.frameid

    def __eq__(self, other):
        return (isinstance(other, Frame)
                and self.header == other.header
                and self.content == other.content
                and self.flags == other.flags
                and self.group == other.group)

    def __repr__(self):
        return "Frame({0!r}, {1!r})".format(self.header, self.content)

    def __str__(self):
        flag = " "
        if isinstance(self.content, Unknown): flag = "?"
        return "{0}{1}({2})".format(flag, self.frameid, self.content._str_fields())


class FrameContent(metaclass=abc.ABCMeta):
    _framespec = tuple()
    _version = tuple()

    def __init__(self, **kwargs):
        assert len(self._framespec) > 0
        for spec in self._framespec:
            setattr(self, spec.name, kwargs.get(spec.name, None))

    def __eq__(self, other):
        return (type(self) is type(other)
                and all(getattr(self, spec.name, None) ==
                        getattr(other, spec.name, None)
                        for spec in self._framespec))

    @classmethod
    def _from_data(cls, frameid, data):
        content = cls()
        for spec in content._framespec:
            try:
                val, data = spec.read(content, data)
                setattr(content, spec.name, val)
            except EOFError:
                if not spec._optional:
                    raise FrameError("Frame {0} is too short for its {1} field"
                                     .format(frameid, spec.name))
                break
        return content

    @classmethod
    def _in_version(cls, *versions):
        "Returns true if this frame is defined in any of the specified versions of ID3."
        for version in versions:
            if (cls._version == version
                or (isinstance(cls._version, tuple)
                    and version in cls._version)):
                return True
        return False

    def __repr__(self):
        args = []
        for spec in self._framespec:
            value = getattr(self, spec.name, None)
            if isinstance(spec, BinaryDataSpec) and isinstance(value, bytes):
                args.append("{0}=<{1} bytes of binary data {2!r}{3}>".format(
                        spec.name, len(value),
                        value[:20], "..." if len(value) > 20 else ""))
            else:
                args.append("{0}={1!r}".format(spec.name, value))
        return "{0}({1})".format(type(self).__name__, ", ".join(args))

    def _str_fields(self):
        fields = []
        for spec in self._framespec:
            fields.append(spec.to_str(getattr(self, spec.name, None)))
        return ", ".join(fields)


class Unknown(FrameContent):
    _framespec = (BinaryDataSpec("raw"),)

class Generic(FrameContent):
    """Content of a registered non-text, non-URL frame.

    raw always holds the complete frame body.  Subclasses declare
    further fields in _framespec; those are decoded from the body too.
    A plain Generic (no extra fields) is used for bodies that cannot be
    interpreted, such as compressed or encrypted frames.
    """
    _framespec = (BinaryDataSpec("raw"),)

    @classmethod
    def _from_data(cls, frameid, data):
        content = super()._from_data(frameid, data)
        content.raw = bytes(data)
        return content

    def __eq__(self, other):
        return super().__eq__(other) and self.raw == other.raw

class TextInformation(FrameContent):
    """Text information frame.

    value is the first string of the frame; values lists all of them
    (ID3v2.4 allows several, separated by terminators).
    """
    _framespec = (EncodingSpec("encoding"),
                  EncodedStringListSpec("values"))

    @property
    def value(self):
        return self.values[0] if self.values else ""

    def _str_fields(self):
        return "{0} {1}".format((text.encodings[self.encoding][0]
                                if self.encoding is not None else "<undef>"),
                                ", ".join(repr(t) for t in self.values))

class UserDefinedText(FrameContent):
    "User defined text information frame"
    _framespec = (EncodingSpec("encoding"),
                  EncodedStringSpec("description"),
                  EncodedFullTextSpec("value"))

class UrlLink(FrameContent):
    _framespec = (URLStringSpec("value"), )
    def _str_fields(self):
        return repr(self.value)

class UserDefinedUrl(FrameContent):
    "User defined URL link frame"
    _framespec = (EncodingSpec("encoding"),
                  EncodedStringSpec("description"),
                  URLStringSpec("value"))

def is_frame_class(cls):
    return (isinstance(cls, type)
            and issubclass(cls, FrameContent)
            and 3 <= len(cls.__name__) <= 4
            and cls.__name__ == cls.__name__.upper())
