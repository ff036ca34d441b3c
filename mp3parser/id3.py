# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""List of frames defined in the various ID3 versions, and the
decoder that maps a frame id to its content class.
"""

from warnings import warn

import mp3parser.frames as Frames
from mp3parser.errors import *
from mp3parser.specs import *



# ID3v2.4

# 4.2.1. Identification frames
class UFID(Frames.Generic):
    "Unique file identifier"
    _framespec = (NullTerminatedStringSpec("owner"), BinaryDataSpec("data"))

class TIT1(Frames.TextInformation): "Content group description"
class TIT2(Frames.TextInformation): "Title/songname/content description"
class TIT3(Frames.TextInformation): "Subtitle/Description refinement"
class TALB(Frames.TextInformation): "Album/Movie/Show title"
class TOAL(Frames.TextInformation): "Original album/movie/show title"
class TRCK(Frames.TextInformation): "Track number/Position in set"
class TPOS(Frames.TextInformation): "Part of a set"
class TSRC(Frames.TextInformation): "ISRC (international standard recording code)"

class TSST(Frames.TextInformation):
    "Set subtitle"
    _version = 4


# 4.2.2. Involved persons frames
class TPE1(Frames.TextInformation): "Lead performer(s)/Soloist(s)"
class TPE2(Frames.TextInformation): "Band/orchestra/accompaniment"
class TPE3(Frames.TextInformation): "Conductor/performer refinement"
class TPE4(Frames.TextInformation): "Interpreted, remixed, or otherwise modified by"
class TOPE(Frames.TextInformation): "Original artist(s)/performer(s)"
class TEXT(Frames.TextInformation): "Lyricist/Text writer"
class TOLY(Frames.TextInformation): "Original lyricist(s)/text writer(s)"
class TCOM(Frames.TextInformation): "Composer"
class TENC(Frames.TextInformation): "Encoded by"

class TMCL(Frames.TextInformation):
    """Musician credits list
    Alternating instrument and person strings, see values.
    """
    _version = 4

class TIPL(Frames.TextInformation):
    """Involved people list
    Alternating function and person strings, see values.
    """
    _version = 4


# 4.2.3. Derived and subjective properties frames

class TBPM(Frames.TextInformation): "BPM (beats per minute)"
# integer in string format

class TLEN(Frames.TextInformation): "Length"
# milliseconds in string format

class TKEY(Frames.TextInformation): "Initial key"
# /^([CDEFGAB][b#]?[m]?|o)$/

class TLAN(Frames.TextInformation): "Language(s)"
# /^...$/  ISO 639-2

class TCON(Frames.TextInformation): "Content type"
class TFLT(Frames.TextInformation): "File type"
class TMED(Frames.TextInformation): "Media type"

class TMOO(Frames.TextInformation):
    "Mood"
    _version = 4


# 4.2.4. Rights and license frames

class TCOP(Frames.TextInformation): "Copyright message"
class TPUB(Frames.TextInformation): "Publisher"
class TOWN(Frames.TextInformation): "File owner/licensee"
class TRSN(Frames.TextInformation): "Internet radio station name"
class TRSO(Frames.TextInformation): "Internet radio station owner"

class TPRO(Frames.TextInformation):
    "Produced notice"
    _version = 4


# 4.2.5. Other text frames

class TOFN(Frames.TextInformation): "Original filename"
class TDLY(Frames.TextInformation): "Playlist delay"
class TSSE(Frames.TextInformation): "Software/Hardware and settings used for encoding"

class TDEN(Frames.TextInformation):
    "Encoding time"
    _version = 4

class TDOR(Frames.TextInformation):
    "Original release time"
    _version = 4

class TDRC(Frames.TextInformation):
    "Recording time"
    _version = 4

class TDRL(Frames.TextInformation):
    "Release time"
    _version = 4

class TDTG(Frames.TextInformation):
    "Tagging time"
    _version = 4

class TSOA(Frames.TextInformation):
    "Album sort order"
    _version = 4

class TSOP(Frames.TextInformation):
    "Performer sort order"
    _version = 4

class TSOT(Frames.TextInformation):
    "Title sort order"
    _version = 4


# 4.2.6. User defined information frame

class TXXX(Frames.UserDefinedText):
    "User defined text information frame"


# 4.3. URL link frames

class WCOM(Frames.UrlLink): "Commercial information"
class WCOP(Frames.UrlLink): "Copyright/Legal information"
class WOAF(Frames.UrlLink): "Official audio file webpage"
class WOAR(Frames.UrlLink): "Official artist/performer webpage"
class WOAS(Frames.UrlLink): "Official audio source webpage"
class WORS(Frames.UrlLink): "Official Internet radio station homepage"
class WPAY(Frames.UrlLink): "Payment"
class WPUB(Frames.UrlLink): "Publishers official webpage"

class WXXX(Frames.UserDefinedUrl):
    "User defined URL link frame"


# 4.4.-4.13  Binary frames
class MCDI(Frames.Generic):
    "Music CD identifier"
    _framespec = (BinaryDataSpec("cd_toc"),)

class ETCO(Frames.Generic):
    "Event timing codes"
    _framespec = (ByteSpec("format"),
                  MultiSpec("events", ByteSpec("type"), IntegerSpec("timestamp", 4)))

class MLLT(Frames.Generic):
    "MPEG location lookup table"
    _framespec = (IntegerSpec("frames", 2), IntegerSpec("bytes", 3),
                  IntegerSpec("milliseconds", 3),
                  ByteSpec("bits_for_bytes"), ByteSpec("bits_for_milliseconds"),
                  BinaryDataSpec("data"))

class SYTC(Frames.Generic):
    "Synchronised tempo codes"
    _framespec = (ByteSpec("format"), BinaryDataSpec("data"))

class USLT(Frames.Generic):
    "Unsynchronised lyric/text transcription"
    _framespec = (EncodingSpec("encoding"), LanguageSpec("language"),
                  EncodedStringSpec("description"), EncodedFullTextSpec("text"))

class SYLT(Frames.Generic):
    "Synchronised lyric/text"
    _framespec = (EncodingSpec("encoding"), LanguageSpec("language"),
                  ByteSpec("format"), ByteSpec("type"),
                  EncodedStringSpec("description"),
                  MultiSpec("data", EncodedStringSpec("text"), IntegerSpec("timestamp", 4)))

class COMM(Frames.Generic):
    "Comments"
    _framespec = (EncodingSpec("encoding"), LanguageSpec("language"),
                  EncodedStringSpec("description"), EncodedFullTextSpec("text"))

class RVA2(Frames.Generic):
    "Relative volume adjustment (2)"
    _framespec = (NullTerminatedStringSpec("description"),
                  MultiSpec("adjustment",
                            ByteSpec("channel"),
                            SignedIntegerSpec("gain", 2),  # * 512
                            VarIntSpec("peak")))

class EQU2(Frames.Generic):
    "Equalisation (2)"
    _framespec = (ByteSpec("method"), NullTerminatedStringSpec("description"),
                  MultiSpec("adjustments",
                            IntegerSpec("frequency", 2), # in 0.5Hz
                            SignedIntegerSpec("adjustment", 2))) # * 512x

class RVRB(Frames.Generic):
    "Reverb"
    _framespec = (IntegerSpec("left", 2),
                  IntegerSpec("right", 2),
                  ByteSpec("bounce_left"), ByteSpec("bounce_right"),
                  ByteSpec("feedback_ltl"), ByteSpec("feedback_ltr"),
                  ByteSpec("feedback_rtr"), ByteSpec("feedback_rtl"),
                  ByteSpec("premix_ltr"), ByteSpec("premix_rtl"))

class APIC(Frames.Generic):
    "Attached picture"
    _framespec = (EncodingSpec("encoding"),
                  NullTerminatedStringSpec("mime"),
                  ByteSpec("type"),
                  EncodedStringSpec("description"),
                  BinaryDataSpec("data"))

    def _str_fields(self):
        return "{0}({1}), desc={2}, mime={3}: {4} bytes".format(
            self.type, picture_type_name(self.type), repr(self.description),
            repr(self.mime), len(self.data))

class GEOB(Frames.Generic):
    "General encapsulated object"
    _framespec = (EncodingSpec("encoding"),
                  NullTerminatedStringSpec("mime"),
                  EncodedStringSpec("filename"),
                  EncodedStringSpec("description"),
                  BinaryDataSpec("data"))

class PCNT(Frames.Generic):
    "Play counter"
    _framespec = (IntegerSpec("count", 4),)

class POPM(Frames.Generic):
    "Popularimeter"
    _framespec = (NullTerminatedStringSpec("email"),
                  ByteSpec("rating"),
                  optionalspec(IntegerSpec("count", 4)))

class RBUF(Frames.Generic):
    "Recommended buffer size"
    _framespec = (IntegerSpec("size", 3),
                  optionalspec(ByteSpec("info")),
                  optionalspec(IntegerSpec("offset", 4)))

class AENC(Frames.Generic):
    "Audio encryption"
    _framespec = (NullTerminatedStringSpec("owner"),
                  IntegerSpec("preview_start", 2),
                  IntegerSpec("preview_length", 2),
                  BinaryDataSpec("data"))

class LINK(Frames.Generic):
    "Linked information"
    _framespec = (SimpleStringSpec("linked_frameid", 4),
                  NullTerminatedStringSpec("url"),
                  BinaryDataSpec("data"))

class POSS(Frames.Generic):
    "Position synchronisation frame"
    _framespec = (ByteSpec("format"),
                  IntegerSpec("position", 4))

class USER(Frames.Generic):
    "Terms of use"
    _framespec = (EncodingSpec("encoding"),
                  LanguageSpec("language"),
                  EncodedFullTextSpec("text"))

class OWNE(Frames.Generic):
    "Ownership frame"
    _framespec = (EncodingSpec("encoding"),
                  NullTerminatedStringSpec("price"),
                  SimpleStringSpec("date", 8),
                  EncodedFullTextSpec("seller"))

class COMR(Frames.Generic):
    "Commercial frame"
    _framespec = (EncodingSpec("encoding"),
                  NullTerminatedStringSpec("price"),
                  SimpleStringSpec("valid", 8),
                  NullTerminatedStringSpec("contact"),
                  ByteSpec("format"),
                  EncodedStringSpec("seller"),
                  EncodedStringSpec("description"),
                  NullTerminatedStringSpec("mime"),
                  BinaryDataSpec("logo"))

class ENCR(Frames.Generic):
    "Encryption method registration"
    _framespec = (NullTerminatedStringSpec("owner"),
                  ByteSpec("symbol"),
                  BinaryDataSpec("data"))

class GRID(Frames.Generic):
    "Group identification registration"
    _framespec = (NullTerminatedStringSpec("owner"),
                  ByteSpec("symbol"),
                  BinaryDataSpec("data"))

class PRIV(Frames.Generic):
    "Private frame"
    _framespec = (NullTerminatedStringSpec("owner"),
                  BinaryDataSpec("data"))

class SIGN(Frames.Generic):
    "Signature frame"
    _framespec = (ByteSpec("group"),
                  BinaryDataSpec("data"))
    _version = 4

class SEEK(Frames.Generic):
    "Seek frame"
    _framespec = (IntegerSpec("offset", 4), )
    _version = 4

class ASPI(Frames.Generic):
    "Audio seek point index"
    _framespec = (IntegerSpec("S", 4),
                  IntegerSpec("L", 4),
                  IntegerSpec("N", 2),
                  ByteSpec("b"),
                  ASPISpec("Fi"))
    _version = 4


# ID3v2.3

class TYER(Frames.TextInformation):
    """Year
    A numerical string with the year of the recording.
    Replaced by TDRC in id3v2.4
    """
    _version = 3

class TDAT(Frames.TextInformation):
    """Date
    A numerical string in DDMM format containing the date for the recording.
    Replaced by TDRC in id3v2.4
    """
    _version = 3

class TIME(Frames.TextInformation):
    """Time
    A numerical string in HHMM format containing the time for the recording.
    Replaced by TDRC in id3v2.4
    """
    _version = 3

class TORY(Frames.TextInformation):
    """Original release year
    Replaced by TDOR in id3v2.4
    """
    _version = 3

class TRDA(Frames.TextInformation):
    """Recording dates
    Replaced by TDRC in id3v2.4
    """
    _version = 3

class TSIZ(Frames.TextInformation):
    """Size
    Size of the audio file in bytes, excluding the ID3v2 tag.
    Removed in id3v2.4
    """
    _version = 3

class IPLS(Frames.Generic):
    """Involved people list
    Replaced by TMCL and TIPL in id3v2.4
    """
    _framespec = (EncodingSpec("encoding"),
                  MultiSpec("people",
                            EncodedStringSpec("involvement"),
                            EncodedStringSpec("person")))
    _version = 3

class EQUA(Frames.Generic):
    """Equalisation
    Replaced by EQU2 in id3v2.4
    """
    _framespec = (ByteSpec("bits"), BinaryDataSpec("data"))
    _version = 3

class RVAD(Frames.Generic):
    """Relative volume adjustment
    Replaced by RVA2 in id3v2.4
    """
    _framespec = (BinaryDataSpec("data"),)
    _version = 3


# ID3v2.2
# Only frames whose layout differs from the T/W rules are listed.

class UFI(UFID): pass
class TXX(TXXX): pass
class WXX(WXXX): pass
class ULT(USLT): pass
class COM(COMM): pass
class GEO(GEOB): pass
class CNT(PCNT): pass
class POP(POPM): pass

class PIC(Frames.Generic):
    "Attached picture"
    _framespec = (EncodingSpec("encoding"),
                  SimpleStringSpec("format", 3),
                  ByteSpec("type"),
                  EncodedStringSpec("description"),
                  BinaryDataSpec("data"))
    _version = 2


# Nonstandard frames
class TCMP(Frames.TextInformation):
    "iTunes: Part of a compilation"

class TDES(Frames.TextInformation):
    "iTunes: Podcast description"

class TGID(Frames.TextInformation):
    "iTunes: Podcast identifier"

class WFED(Frames.UrlLink):
    "iTunes: Podcast feed URL"

class TCAT(Frames.TextInformation):
    "iTunes: Podcast category"

class TKWD(Frames.TextInformation):
    """iTunes: Podcast keywords
    Comma-separated list of keywords.
    """

class PCST(Frames.Generic):
    """iTunes: Podcast flag.

    If this frame is present, iTunes considers the file to be a podcast.
    Value should be zero.
    """
    _framespec = (IntegerSpec("value", 4),)


def _register_frames():
    """Supply missing version fields and build the frame id registry."""
    registry = {}
    for obj in list(globals().values()):
        if Frames.is_frame_class(obj):
            if len(obj.__name__) == 3:
                obj._version = 2
            if len(obj.__name__) == 4 and not obj._version:
                obj._version = (3, 4)
            assert obj.__name__ not in registry
            registry[obj.__name__] = obj
    return registry

known_frames = _register_frames()


def decode_content(frameid, data, version=4):
    """Decode the body of a frame into the content class registered for frameid.

    Unregistered T and W frames are read as plain text and URL frames;
    anything else becomes Unknown with its bytes untouched.  A registered
    frame that its tag's version does not define (TYER in ID3v2.4, TDRC
    in ID3v2.3) is still decoded, with a FrameWarning.
    """
    cls = known_frames.get(frameid)
    if cls is not None and not cls._in_version(version):
        warn("Frame {0} is not defined in ID3v2.{1}".format(frameid, version),
             FrameWarning)
    if cls is None:
        if frameid.startswith("T"):
            cls = Frames.TextInformation
        elif frameid.startswith("W"):
            cls = Frames.UrlLink
        else:
            warn("Unknown frame id " + frameid, UnknownFrameWarning)
            cls = Frames.Unknown
    content = cls._from_data(frameid, data)
    if version < 4 and getattr(content, "encoding", None) in (2, 3):
        warn("Frame {0} uses an ID3v2.4 text encoding in an ID3v2.{1} tag"
             .format(frameid, version), FrameWarning)
    return content


# Attached picture (APIC & PIC) types
picture_types = (
    "Other", "32x32 icon", "Other icon", "Front Cover", "Back Cover",
    "Leaflet", "Media", "Lead artist", "Artist", "Conductor",
    "Band/Orchestra", "Composer", "Lyricist/text writer",
    "Recording Location", "Recording", "Performance", "Screen capture",
    "A bright coloured fish", "Illustration", "Band/artist",
    "Publisher/Studio")

def picture_type_name(type):
    if type is not None and 0 <= type < len(picture_types):
        return picture_types[type]
    return "Unknown"


__all__ = [ obj.__name__ for obj in globals().values()
            if Frames.is_frame_class(obj)]
