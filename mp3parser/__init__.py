# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import mp3parser.frames
import mp3parser.tags
import mp3parser.id3
import mp3parser.mpeg

from mp3parser.errors import *
from mp3parser.cursor import ByteCursor
from mp3parser.frames import (Frame, FrameHeader, FrameContent, TextInformation,
                              UserDefinedText, UrlLink, UserDefinedUrl,
                              Generic, Unknown)
from mp3parser.tags import read_tag, read_id3v2_tag, Tag
from mp3parser.id3v1 import read_id3v1_tag, Tag1
from mp3parser.mpeg import (read_frame_header, iter_frame_headers,
                            find_frame_header, read_last_frame_header,
                            read_xing_tag, stream_duration, MpegFrameHeader)

version = (0, 1, 0)
versionstr = ".".join((str(v) for v in version))
