# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Reading ID3v2 tags from in-memory buffers.

read_tag() checks for an ID3v2 header at the given offset, then walks the
frames of the tag using a Layout selected from the tag's major version.
The layout knows how wide frame ids and sizes are and how frame flags
are interpreted; FrameReader does the walking.
"""

import abc
import collections
import collections.abc
import re
import struct

from abc import abstractmethod
from warnings import warn

from mp3parser.errors import *
from mp3parser.conversion import *
from mp3parser.cursor import ByteCursor

import mp3parser.frames as Frames
import mp3parser.id3 as id3

_TAG_UNSYNCHRONISED = 0x80
_TAG_EXTENDED_HEADER = 0x40
_TAG_EXPERIMENTAL = 0x20

_TAG22_COMPRESSED = 0x40

_TAG24_FOOTER = 0x10

_FRAME23_FORMAT_COMPRESSED = 0x0080
_FRAME23_FORMAT_ENCRYPTED = 0x0040
_FRAME23_FORMAT_GROUP = 0x0020
_FRAME23_FORMAT_UNKNOWN_MASK = 0x001F

_FRAME23_STATUS_DISCARD_ON_TAG_ALTER = 0x8000
_FRAME23_STATUS_DISCARD_ON_FILE_ALTER = 0x4000
_FRAME23_STATUS_READ_ONLY = 0x2000
_FRAME23_STATUS_UNKNOWN_MASK = 0x1F00

_FRAME24_FORMAT_GROUP = 0x0040
_FRAME24_FORMAT_COMPRESSED = 0x0008
_FRAME24_FORMAT_ENCRYPTED = 0x0004
_FRAME24_FORMAT_UNSYNCHRONISED = 0x0002
_FRAME24_FORMAT_DATA_LENGTH_INDICATOR = 0x0001
_FRAME24_FORMAT_UNKNOWN_MASK = 0x00B0

_FRAME24_STATUS_DISCARD_ON_TAG_ALTER = 0x4000
_FRAME24_STATUS_DISCARD_ON_FILE_ALTER = 0x2000
_FRAME24_STATUS_READ_ONLY = 0x1000
_FRAME24_STATUS_UNKNOWN_MASK = 0x8F00

HEADER_LENGTH = 10

TagHeader = collections.namedtuple("TagHeader", "version revision flags size")
ExtendedHeader = collections.namedtuple("ExtendedHeader",
                                        "size flags padding_size crc32 restrictions")


def read_tag(data, offset=0, *, max_size=None, strict=False):
    """Read the ID3v2 tag at offset in data.

    Returns a Tag, or None if there is no tag at offset (no "ID3" marker,
    or a size field that is not a valid syncsafe integer).

    If a frame turns out to be malformed, the frame walk stops there: the
    returned tag holds the frames read so far and tag.error is set to the
    exception.  With strict=True the exception is raised instead.
    """
    cursor = ByteCursor(data)
    if offset < 0 or len(data) - offset < 3 or cursor.slice(offset, 3) != b"ID3":
        return None
    header = cursor.slice(offset, HEADER_LENGTH)
    (version, revision, bflags) = header[3:6]
    try:
        size = Syncsafe.decode(header[6:10])
    except InvalidSyncSafeByteError as e:
        warn("Ignoring ID3v2 tag with invalid size: {0}".format(e), TagWarning)
        return None
    if max_size is not None and size > max_size:
        raise TagError("ID3v2 tag size {0} exceeds limit of {1} bytes"
                       .format(size, max_size))

    layout = _layouts.get(version)
    if layout is None:
        warn("Unknown ID3 version: 2.{0}.{1}; frame contents are left undecoded"
             .format(version, revision), TagWarning)
        layout = UnknownLayout(version)

    tag = Tag(TagHeader(version, revision, bflags, size), offset)
    tag.flags = layout.tag_flags(bflags)

    region = cursor.slice(offset + HEADER_LENGTH, size)
    if "unsynchronisation" in tag.flags and layout.unsync_region:
        region = Unsync.decode(region)
    rcursor = ByteCursor(region)

    try:
        pos = 0
        if "extended_header" in tag.flags:
            (tag.extended_header, pos) = layout.read_extended_header(rcursor, tag.flags)
        if "compression" in tag.flags:
            warn("ID3v2.2 tag compression is not supported; frames not read",
                 UnsupportedFrameWarning)
            return tag
        reader = FrameReader(layout, tag.flags)
        while pos < len(region):
            (frame, pos) = reader.read(rcursor, pos, len(region))
            if frame is None:
                break
            tag.frames.append(frame)
    except (FrameError, TagError, InvalidSyncSafeByteError, OutOfBoundsError) as e:
        if strict:
            raise
        warn("Frame walk aborted after {0} frames: {1}".format(len(tag.frames), e),
             TagWarning)
        tag.error = e
    return tag

read_id3v2_tag = read_tag


class Tag(collections.abc.Mapping):
    """An ID3v2 tag read from a buffer.

    The tag maps frame ids to the list of frames with that id, in tag
    order; frames holds every frame in the order they were read.
    """
    def __init__(self, header, offset=0):
        self.header = header
        self.offset = offset
        self.flags = set()
        self.extended_header = None
        self.frames = []
        self.error = None

    @property
    def version(self):
        return self.header.version

    @property
    def size(self):
        return self.header.size

    @property
    def length(self):
        "Total number of bytes the tag occupies, including header and footer."
        return (HEADER_LENGTH + self.header.size
                + (HEADER_LENGTH if "footer" in self.flags else 0))

    # Mapping methods
    def __getitem__(self, key):
        frames = [frame for frame in self.frames if frame.frameid == key]
        if not frames:
            raise KeyError("Key not found: " + repr(key))
        return frames

    def __iter__(self):
        seen = set()
        for frame in self.frames:
            if frame.frameid not in seen:
                seen.add(frame.frameid)
                yield frame.frameid

    def __len__(self):
        return len(set(frame.frameid for frame in self.frames))

    def __repr__(self):
        return "<{0}: ID3v2.{1} tag{2} with {3} frames>".format(
            type(self).__name__,
            self.version,
            ("({0})".format(", ".join(sorted(self.flags)))
             if len(self.flags) > 0 else ""),
            len(self.frames))


def is_frame_id(data):
    # Allow a single space at end of four-character ids
    # Some programs (e.g. iTunes 8.2) generate such frames when converting
    # from 2.2 to 2.3/2.4 tags.
    pattern = re.compile(b"^[A-Z][A-Z0-9]{2}[A-Z0-9 ]?$")
    return pattern.match(data)


class FrameReader:
    """Reads frames one at a time from a tag's frame region."""
    def __init__(self, layout, tag_flags=()):
        self.layout = layout
        self.tag_flags = tag_flags

    def read(self, cursor, pos, end):
        """Read the frame starting at pos; frames must not extend beyond end.

        Returns (frame, next_pos).  frame is None if padding begins at pos.
        """
        layout = self.layout
        if end - pos < layout.header_length:
            return (None, end)
        header = cursor.slice(pos, layout.header_length)
        rawid = header[:layout.id_length]
        if not any(rawid):
            return (None, end)
        if not is_frame_id(rawid):
            raise FrameError("Invalid frame id {0!r} at offset {1}".format(rawid, pos))
        frameid = rawid.decode("ASCII")
        size = layout.decode_size(header[layout.id_length:layout.id_length + layout.size_length])
        bflags = Int8.decode(header[layout.id_length + layout.size_length:])
        if size == 0:
            warn("Empty {0} frame; treating the rest of the tag as padding".format(frameid),
                 TagWarning)
            return (None, end)
        pos += layout.header_length
        if size > end - pos:
            raise TruncatedFrameError(
                "Frame {0} needs {1} bytes, but only {2} remain in the tag"
                .format(frameid, size, end - pos))
        data = cursor.slice(pos, size)

        (flags, group, data, readable) = layout.interpret_frame_flags(
            frameid, bflags, data, self.tag_flags)
        if not readable:
            warn("Frame {0} is {1}; its body is kept undecoded"
                 .format(frameid, " and ".join(sorted(flags & {"compressed", "encrypted", "unknown_format"}))),
                 UnsupportedFrameWarning)
            content = Frames.Generic._from_data(frameid, data)
        elif not layout.decode_contents:
            content = Frames.Unknown._from_data(frameid, data)
        else:
            content = id3.decode_content(frameid, data, layout.version)
        frame = Frames.Frame(Frames.FrameHeader(frameid, size, bflags), content, flags, group)
        return (frame, pos + size)


class Layout(metaclass=abc.ABCMeta):
    """Version-specific details of the ID3v2 frame format."""
    version = None
    id_length = 4
    size_length = 4
    header_length = 10
    decode_contents = True
    # De-unsynchronise the whole frame region before reading frames
    unsync_region = True

    _known_tag_flags = 0

    def tag_flags(self, bflags):
        flags = set()
        if bflags & _TAG_UNSYNCHRONISED:
            flags.add("unsynchronisation")
        if bflags & ~self._known_tag_flags & 0xFF:
            warn("Unknown ID3v2.{0} flags: 0x{1:02X}".format(self.version, bflags),
                 TagWarning)
        return flags

    @abstractmethod
    def decode_size(self, data): pass

    def interpret_frame_flags(self, frameid, bflags, data, tag_flags):
        """Returns (flags, group, data, readable).

        data is the frame body with any flag-related prefixes removed;
        readable is False if the body cannot be interpreted.
        """
        return (set(), None, data, True)

    def read_extended_header(self, cursor, flags):
        raise TagError("ID3v2.{0} tags have no extended header".format(self.version))

    @staticmethod
    def _take(frameid, data, length):
        if len(data) < length:
            raise FrameError("Frame {0} is too short for its flag data".format(frameid))
        return data[:length], data[length:]


class Layout22(Layout):
    version = 2
    id_length = 3
    size_length = 3
    header_length = 6

    _known_tag_flags = _TAG_UNSYNCHRONISED | _TAG22_COMPRESSED

    def tag_flags(self, bflags):
        flags = super().tag_flags(bflags)
        if bflags & _TAG22_COMPRESSED: # Compression bit is ill-defined in standard
            flags.add("compression")
        return flags

    def decode_size(self, data):
        return Int8.decode(data)


class Layout23(Layout):
    version = 3

    _known_tag_flags = _TAG_UNSYNCHRONISED | _TAG_EXTENDED_HEADER | _TAG_EXPERIMENTAL

    def tag_flags(self, bflags):
        flags = super().tag_flags(bflags)
        if bflags & _TAG_EXTENDED_HEADER:
            flags.add("extended_header")
        if bflags & _TAG_EXPERIMENTAL:
            flags.add("experimental")
        return flags

    def decode_size(self, data):
        return Int8.decode(data)

    def read_extended_header(self, cursor, flags):
        (size, ext_flags, padding_size) = struct.unpack("!IHI", cursor.slice(0, 10))
        if size != 6 and size != 10:
            warn("Unexpected size of ID3v2.3 extended header: {0}".format(size), TagWarning)
        crc32 = None
        if ext_flags & 0x8000:
            flags.add("ext:crc_present")
            crc32 = cursor.uint32(10)
        return (ExtendedHeader(size, ext_flags, padding_size, crc32, None), 4 + size)

    def interpret_frame_flags(self, frameid, bflags, data, tag_flags):
        flags = set()
        group = None
        readable = True
        # Frame encoding flags
        if bflags & _FRAME23_FORMAT_UNKNOWN_MASK:
            flags.add("unknown_format")
            readable = False
        if bflags & _FRAME23_FORMAT_COMPRESSED:
            flags.add("compressed")
            (expanded_size, data) = self._take(frameid, data, 4)
            readable = False
        if bflags & _FRAME23_FORMAT_ENCRYPTED:
            flags.add("encrypted")
            (method, data) = self._take(frameid, data, 1)
            readable = False
        if bflags & _FRAME23_FORMAT_GROUP:
            flags.add("group")
            (group, data) = self._take(frameid, data, 1)
            group = group[0]
        # Frame status messages
        if bflags & _FRAME23_STATUS_DISCARD_ON_TAG_ALTER:
            flags.add("discard_on_tag_alter")
        if bflags & _FRAME23_STATUS_DISCARD_ON_FILE_ALTER:
            flags.add("discard_on_file_alter")
        if bflags & _FRAME23_STATUS_READ_ONLY:
            flags.add("read_only")
        if bflags & _FRAME23_STATUS_UNKNOWN_MASK:
            warn("Unexpected ID3v2.3 frame status flags on {0}: 0x{1:X}"
                 .format(frameid, bflags), FrameWarning)
        return (flags, group, data, readable)


class Layout24(Layout):
    # Older versions of iTunes stored v2.4 frame sizes as
    # straight 8bit integers, not syncsafe.
    # (This is known to be fixed in iTunes 8.2.)
    ITUNES_WORKAROUND = False

    version = 4
    # Frame sizes count unsynchronised bytes, so each frame body is
    # de-unsynchronised on its own.
    unsync_region = False

    _known_tag_flags = (_TAG_UNSYNCHRONISED | _TAG_EXTENDED_HEADER
                        | _TAG_EXPERIMENTAL | _TAG24_FOOTER)

    def tag_flags(self, bflags):
        flags = super().tag_flags(bflags)
        if bflags & _TAG_EXTENDED_HEADER:
            flags.add("extended_header")
        if bflags & _TAG_EXPERIMENTAL:
            flags.add("experimental")
        if bflags & _TAG24_FOOTER:
            flags.add("footer")
        return flags

    def decode_size(self, data):
        if self.ITUNES_WORKAROUND:
            return Int8.decode(data)
        return Syncsafe.decode(data)

    def __read_extended_header_flag_data(self, cursor, pos):
        # 1-byte length + data
        length = cursor.uint8(pos)
        if length & 128:
            raise TagError("Invalid size of extended header field")
        return (cursor.slice(pos + 1, length), pos + 1 + length)

    def read_extended_header(self, cursor, flags):
        size = cursor.syncsafe32(0)
        if size < 6:
            raise TagError("Invalid size of ID3v2.4 extended header: {0}".format(size))
        numflags = cursor.uint8(4)
        if numflags != 1:
            warn("Unexpected number of ID3v2.4 extended flag bytes: {0}".format(numflags),
                 TagWarning)
        ext_flags = cursor.uint8(5)
        pos = 5 + numflags
        crc32 = None
        restrictions = None
        if ext_flags & 0x40:
            flags.add("ext:update")
            (dummy, pos) = self.__read_extended_header_flag_data(cursor, pos)
        if ext_flags & 0x20:
            flags.add("ext:crc_present")
            (crc32, pos) = self.__read_extended_header_flag_data(cursor, pos)
            crc32 = Syncsafe.decode(crc32)
        if ext_flags & 0x10:
            flags.add("ext:restrictions")
            (restrictions, pos) = self.__read_extended_header_flag_data(cursor, pos)
            restrictions = restrictions[0] if restrictions else None
        return (ExtendedHeader(size, ext_flags, None, crc32, restrictions), size)

    def interpret_frame_flags(self, frameid, bflags, data, tag_flags):
        flags = set()
        group = None
        readable = True
        # Frame format flags
        if bflags & _FRAME24_FORMAT_UNKNOWN_MASK:
            flags.add("unknown_format")
            readable = False
        if bflags & _FRAME24_FORMAT_GROUP:
            flags.add("group")
            (group, data) = self._take(frameid, data, 1)
            group = group[0]
        if bflags & _FRAME24_FORMAT_ENCRYPTED:
            flags.add("encrypted")
            (method, data) = self._take(frameid, data, 1)
            readable = False
        if bflags & _FRAME24_FORMAT_DATA_LENGTH_INDICATOR:
            flags.add("data_length_indicator")
            (expanded_size, data) = self._take(frameid, data, 4)
        if bflags & _FRAME24_FORMAT_COMPRESSED:
            flags.add("compressed")
            readable = False
        if (bflags & _FRAME24_FORMAT_UNSYNCHRONISED
            or "unsynchronisation" in tag_flags):
            flags.add("unsynchronised")
            data = Unsync.decode(data)
        # Frame status flags
        if bflags & _FRAME24_STATUS_DISCARD_ON_TAG_ALTER:
            flags.add("discard_on_tag_alter")
        if bflags & _FRAME24_STATUS_DISCARD_ON_FILE_ALTER:
            flags.add("discard_on_file_alter")
        if bflags & _FRAME24_STATUS_READ_ONLY:
            flags.add("read_only")
        if bflags & _FRAME24_STATUS_UNKNOWN_MASK:
            warn("Unexpected status flags on {0} frame: 0x{1:X}".format(frameid, bflags),
                 FrameWarning)
        return (flags, group, data, readable)


class UnknownLayout(Layout24):
    """Walks tags of unsupported versions with the ID3v2.4 layout,
    keeping frame bodies as raw bytes."""
    decode_contents = False
    unsync_region = True

    def __init__(self, version):
        self.version = version

    def tag_flags(self, bflags):
        flags = set()
        if bflags & _TAG_UNSYNCHRONISED:
            flags.add("unsynchronisation")
        return flags

    def interpret_frame_flags(self, frameid, bflags, data, tag_flags):
        return (set(), None, data, True)


_layouts = {
    2: Layout22(),
    3: Layout23(),
    4: Layout24(),
    }
