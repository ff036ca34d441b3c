# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""MPEG audio frame headers.

A frame header is 4 bytes:

  AAAAAAAA AAABBCCD EEEEFFGH IIJJKLMM

  A  frame sync (all ones)     E  bitrate index
  B  version id                F  sample rate index
  C  layer                     G  padding, H private
  D  protection (0: CRC)       I  channel mode, J mode extension
                               K  copyright, L original, M emphasis

The length of a frame follows from its header alone, so frames can be
walked without decoding any audio.
"""

import collections

from mp3parser.cursor import ByteCursor
from mp3parser.errors import OutOfBoundsError
import mp3parser.id3v1 as id3v1
import mp3parser.tags as tags

# Channel modes
STEREO = 0
JOINT_STEREO = 1
DUAL_CHANNEL = 2
MONO = 3

_CHANNELS_TO_STR = {
    STEREO: 'stereo',
    JOINT_STEREO: 'joint_stereo',
    DUAL_CHANNEL: 'dual_channel',
    MONO: 'mono',
}

# Version id bits -> MPEG version; 0b01 is reserved
_VERSIONS = {0b00: 2.5, 0b10: 2, 0b11: 1}

# Layer bits -> layer; 0b00 is reserved
_LAYERS = {0b01: 3, 0b10: 2, 0b11: 1}

# Bitrates in kbps, indexed by bitrate index.  Index 0 is free format,
# index 15 is invalid.
_BITRATES = {
    (1, 1): (None, 32, 64, 96, 128, 160, 192, 224, 256, 288, 320, 352, 384, 416, 448),
    (1, 2): (None, 32, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 384),
    (1, 3): (None, 32, 40, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320),
    (2, 1): (None, 32, 48, 56, 64, 80, 96, 112, 128, 144, 160, 176, 192, 224, 256),
    (2, 2): (None, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160),
    (2, 3): (None, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160),
}

_SAMPLE_RATES = {
    1: (44100, 48000, 32000),
    2: (22050, 24000, 16000),
    2.5: (11025, 12000, 8000),
}

# Samples per frame, keyed by (version, layer)
_SAMPLES = {
    (1, 1): 384, (1, 2): 1152, (1, 3): 1152,
    (2, 1): 384, (2, 2): 1152, (2, 3): 576,
}

# Size of the layer III side information, keyed by (version, mono)
_SIDE_INFO_SIZE = {
    (1, False): 32, (1, True): 17,
    (2, False): 17, (2, True): 9,
}

HEADER_LENGTH = 4

# The largest possible frame (MPEG-2.5 layer II, 160 kbps at 8 kHz, padded)
MAX_FRAME_LENGTH = 2881


class MpegFrameHeader(object):
    """Encapsulates the data in an MPEG audio frame header.

    Attributes:
      offset: position of the header in the buffer it was read from
      version: 1, 2 or 2.5
      layer: 1, 2 or 3
      protected: a bool, if True the header is followed by a 16-bit CRC
      bitrate_kbps: an int; None for free-format streams
      sample_rate_hz: an int
      padding: a bool, if True the frame is padded by an extra slot
      channel_mode: one of STEREO, JOINT_STEREO, DUAL_CHANNEL, MONO
      samples: number of samples per channel in the frame
      frame_length: total size of the frame in bytes, header included;
        None for free-format streams
      duration_ms: a float, the playing time of the frame
    """

    def __init__(self, offset, version, layer, protected, bitrate_kbps,
                 sample_rate_hz, padding, private, channel_mode,
                 mode_extension, copyright, original, emphasis):
        self.offset = offset
        self.version = version
        self.layer = layer
        self.protected = protected
        self.bitrate_kbps = bitrate_kbps
        self.sample_rate_hz = sample_rate_hz
        self.padding = padding
        self.private = private
        self.channel_mode = channel_mode
        self.mode_extension = mode_extension
        self.copyright = copyright
        self.original = original
        self.emphasis = emphasis

        self.samples = _SAMPLES[(1 if version == 1 else 2, layer)]
        self.duration_ms = self.samples * 1000.0 / sample_rate_hz
        self.frame_length = None
        if bitrate_kbps is not None:
            slot = 4 if layer == 1 else 1
            self.frame_length = ((self.samples // 8 // slot) * bitrate_kbps * 1000
                                 // sample_rate_hz + padding) * slot

    @property
    def free_format(self):
        return self.bitrate_kbps is None

    @property
    def channels_str(self):
        return _CHANNELS_TO_STR[self.channel_mode]

    @property
    def channels(self):
        return 1 if self.channel_mode == MONO else 2

    @property
    def side_info_size(self):
        "Size of the side information following the header (layer III)."
        return _SIDE_INFO_SIZE[(1 if self.version == 1 else 2,
                                self.channel_mode == MONO)]

    def __eq__(self, other):
        return isinstance(other, MpegFrameHeader) and vars(self) == vars(other)

    def __str__(self):
        """Produce a human-readable version of this header."""
        attributes = ['MPEG-%s' % self.version, 'layer %d' % self.layer]
        attributes.append('%gKhz' % (self.sample_rate_hz/1000.0))
        if self.bitrate_kbps is not None:
            attributes.append('%gKbps' % self.bitrate_kbps)
        else:
            attributes.append('free')
        attributes.append(self.channels_str)
        if self.protected:
            attributes.append('prot')
        if self.padding:
            attributes.append('pad')
        return '[MpegFrameHeader %s]' % ' '.join(attributes)

    __repr__ = __str__


def read_frame_header(data, offset=0):
    """Extract an MPEG frame header from data at offset.

    MPEG headers consist of 4 bytes, so this function will always fail
    (and return None) if fewer than 4 bytes are available.

    Returns:
      An MpegFrameHeader object, or None if there is no valid header at
      offset.  Free-format frames are returned with bitrate_kbps and
      frame_length set to None.
    """
    if offset < 0 or len(data) < offset + HEADER_LENGTH:
        return None

    frame_data = ByteCursor(data).uint32(offset)
    # 11 bits of frame sync
    if (frame_data >> 21) & 0x7FF != 0x7FF:
        return None

    version = _VERSIONS.get((frame_data >> 19) & 0x3)
    layer = _LAYERS.get((frame_data >> 17) & 0x3)
    if version is None or layer is None:
        return None

    protected = not (frame_data >> 16) & 0x1

    bitrate_raw = (frame_data >> 12) & 0xF
    if bitrate_raw == 0xF:
        return None
    bitrate_kbps = _BITRATES[(1 if version == 1 else 2, layer)][bitrate_raw]

    sample_rate_raw = (frame_data >> 10) & 0x3
    if sample_rate_raw == 3:
        return None
    sample_rate_hz = _SAMPLE_RATES[version][sample_rate_raw]

    return MpegFrameHeader(offset=offset,
                           version=version,
                           layer=layer,
                           protected=protected,
                           bitrate_kbps=bitrate_kbps,
                           sample_rate_hz=sample_rate_hz,
                           padding=bool((frame_data >> 9) & 0x1),
                           private=bool((frame_data >> 8) & 0x1),
                           channel_mode=(frame_data >> 6) & 0x3,
                           mode_extension=(frame_data >> 4) & 0x3,
                           copyright=bool((frame_data >> 3) & 0x1),
                           original=bool((frame_data >> 2) & 0x1),
                           emphasis=frame_data & 0x3)


def iter_frame_headers(data, offset=0):
    """Yield consecutive frame headers starting at offset.

    Each header's frame_length leads to the next one.  The walk ends at
    the end of data, at the first position without a valid header, or
    after a free-format frame (whose length is unknown).
    """
    while True:
        header = read_frame_header(data, offset)
        if header is None:
            return
        yield header
        if header.frame_length is None:
            return
        offset += header.frame_length


def find_frame_header(data, offset=0, limit=None):
    """Find the next MPEG frame header in data, at or after offset.

    Args:
      data: a buffer containing a slice of an MPEG audio stream
      offset: where to start looking
      limit: if given, give up after scanning this many bytes

    Returns:
      A 2-tuple of the form (header, offset).
        If header is None, there is guaranteed to be no frame up to the offset.
        Otherwise header is an MpegFrameHeader object describing the frame
        that begins at the offset.
    """
    cursor = ByteCursor(data)
    end = len(data) if limit is None else min(len(data), offset + limit)
    i = offset
    while i < end:
        i = cursor.find(b"\xff", i, end)
        # No frame synch byte found
        if i == -1:
            return None, end
        header = read_frame_header(data, i)
        if header is not None:
            return header, i
        # Otherwise this was not actually the beginning of a new frame,
        # so move forward one byte and keep looking.
        i += 1
    return None, end


def read_last_frame_header(data):
    """Return the header of the last complete frame in data, or None.

    The last frame is the one that ends exactly at the end of data, or
    where a trailing ID3v1 tag begins.
    """
    end = len(data)
    if id3v1.read_id3v1_tag(data) is not None:
        end -= id3v1.TAG_LENGTH
    for i in range(end - HEADER_LENGTH, max(-1, end - MAX_FRAME_LENGTH - 1), -1):
        if data[i] != 0xFF:
            continue
        header = read_frame_header(data, i)
        if (header is not None and header.frame_length is not None
            and i + header.frame_length == end):
            return header
    return None


XingTag = collections.namedtuple("XingTag", "marker frames bytes toc quality")

_XING_FRAMES = 0x1
_XING_BYTES = 0x2
_XING_TOC = 0x4
_XING_QUALITY = 0x8

def _xing_fields_length(flags):
    length = 0
    if flags & _XING_FRAMES: length += 4
    if flags & _XING_BYTES: length += 4
    if flags & _XING_TOC: length += 100
    if flags & _XING_QUALITY: length += 4
    return length

def read_xing_tag(data, offset=0):
    """Read the Xing (VBR) or Info (CBR) header in the frame at offset.

    Returns an XingTag, or None if the frame carries no such header.
    Fields that are not present are None.
    """
    header = read_frame_header(data, offset)
    if header is None or header.layer != 3:
        return None
    cursor = ByteCursor(data)
    pos = offset + HEADER_LENGTH + header.side_info_size
    if len(data) < pos + 8:
        return None
    marker = cursor.slice(pos, 4)
    if marker not in (b"Xing", b"Info"):
        return None
    flags = cursor.uint32(pos + 4)
    pos += 8
    if len(data) < pos + _xing_fields_length(flags):
        # Truncated frame
        return None
    frames = nbytes = toc = quality = None
    if flags & _XING_FRAMES:
        frames = cursor.uint32(pos)
        pos += 4
    if flags & _XING_BYTES:
        nbytes = cursor.uint32(pos)
        pos += 4
    if flags & _XING_TOC:
        toc = list(cursor.slice(pos, 100))
        pos += 100
    if flags & _XING_QUALITY:
        quality = cursor.uint32(pos)
    return XingTag(marker.decode("ASCII"), frames, nbytes, toc, quality)


def stream_duration(data, offset=None):
    """Return the playing time of the MPEG stream in data, in milliseconds.

    If offset is None, the stream starts after the ID3v2 tag at the
    beginning of data (if any).  A Xing/Info frame count is used when the
    first frame has one; otherwise every frame is walked.
    """
    if offset is None:
        try:
            tag = tags.read_tag(data)
        except OutOfBoundsError:
            # The tag claims more bytes than data holds
            tag = None
        offset = tag.offset + tag.length if tag is not None else 0
    header, offset = find_frame_header(data, offset)
    if header is None:
        return 0.0
    xing = read_xing_tag(data, offset)
    if xing is not None and xing.frames is not None:
        return xing.frames * header.duration_ms
    return sum(h.duration_ms for h in iter_frame_headers(data, offset))
