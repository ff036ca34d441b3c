# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""ID3v1 and ID3v1.1 tags."""

from mp3parser.errors import *

TAG_LENGTH = 128

def read_id3v1_tag(data):
    """Read the ID3v1 tag in the last 128 bytes of data.
    Returns None if data is too short or there is no TAG marker."""
    if len(data) < TAG_LENGTH:
        return None
    return Tag1.decode(bytes(data[-TAG_LENGTH:]))

class Tag1:
    def __init__(self, title=None, artist=None, album=None, year=None,
                 comment=None, track=None, genre=None):
        self.title = title
        self.artist = artist
        self.album = album
        self.year = year
        self.comment = comment
        self.track = track
        self.genre = genre

    def __eq__(self, other):
        return (isinstance(other, Tag1)
                and self.title == other.title
                and self.artist == other.artist
                and self.album == other.album
                and self.year == other.year
                and self.comment == other.comment
                and self.track == other.track
                and self.genre == other.genre)

    def __repr__(self):
        return ("Tag1(title={0.title!r}, artist={0.artist!r}, album={0.album!r}, "
                "year={0.year!r}, comment={0.comment!r}, track={0.track!r}, "
                "genre={0.genre!r})".format(self))

    @property
    def version(self):
        return "1.1" if self.track is not None else "1.0"

    @property
    def genre_name(self):
        if self.genre is not None and 0 <= self.genre < len(genres):
            return genres[self.genre]
        return None

    @staticmethod
    def _decode_field(data):
        return data.rstrip(b"\x00 ").decode("iso-8859-1")

    @classmethod
    def decode(cls, data):
        "Decode a 128-byte ID3v1 tag; returns None if the TAG marker is missing."
        if len(data) != TAG_LENGTH:
            raise TagError("ID3v1 tag must be exactly 128 bytes")
        if data[0:3] != b"TAG":
            return None
        tag = cls()
        tag.title = cls._decode_field(data[3:33])
        tag.artist = cls._decode_field(data[33:63])
        tag.album = cls._decode_field(data[63:93])
        tag.year = cls._decode_field(data[93:97])
        comment = data[97:127]
        if comment[28] == 0 and comment[29] != 0:
            # ID3v1.1
            tag.track = comment[29]
            comment = comment[0:28]
        tag.comment = cls._decode_field(comment)
        tag.genre = data[127]
        return tag


# ID3v1 genre list
genres = (
    "Blues", "Classic Rock", "Country", "Dance", "Disco", "Funk", "Grunge",
    "Hip-Hop", "Jazz", "Metal", "New Age", "Oldies", "Other", "Pop", "R&B",
    "Rap", "Reggae", "Rock", "Techno", "Industrial", "Alternative", "Ska",
    "Death Metal", "Pranks", "Soundtrack", "Euro-Techno", "Ambient",
    "Trip-Hop", "Vocal", "Jazz+Funk", "Fusion", "Trance", "Classical",
    "Instrumental", "Acid", "House", "Game", "Sound Clip","Gospel", "Noise",
    "AlternRock", "Bass", "Soul", "Punk", "Space", "Meditative",
    "Instrumental Pop", "Instrumental Rock", "Ethnic", "Gothic", "Darkwave",
    "Techno-Industrial", "Electronic", "Pop-Folk", "Eurodance", "Dream",
    "Southern Rock", "Comedy", "Cult", "Gangsta", "Top 40", "Christian Rap",
    "Pop/Funk", "Jungle", "Native American", "Cabaret", "New Wave",
    "Psychadelic", "Rave", "Showtunes", "Trailer", "Lo-Fi", "Tribal",
    "Acid Punk", "Acid Jazz", "Polka", "Retro", "Musical", "Rock & Roll",
    "Hard Rock",
    # 80-125: Winamp extensions
    "Folk", "Folk-Rock", "National Folk", "Swing", "Fast Fusion", "Bebob",
    "Latin", "Revival", "Celtic", "Bluegrass", "Avantgarde", "Gothic Rock",
    "Progressive Rock", "Psychedelic Rock", "Symphonic Rock", "Slow Rock",
    "Big Band", "Chorus", "Easy Listening", "Acoustic", "Humour", "Speech",
    "Chanson", "Opera", "Chamber Music", "Sonata", "Symphony", "Booty Bass",
    "Primus", "Porn Groove", "Satire", "Slow Jam", "Club", "Tango", "Samba",
    "Folklore", "Ballad", "Power Ballad", "Rhythmic Soul", "Freestyle",
    "Duet", "Punk Rock", "Drum Solo", "A capella", "Euro-House",
    "Dance Hall",
    # 126-147: Even more esoteric Winamp extensions
    "Goa", "Drum & Bass", "Club House", "Hardcore", "Terror", "Indie",
    "BritPop", "Negerpunk", "Polsk Punk", "Beat", "Christian Gangsta Rap",
    "Heavy Metal", "Black Metal", "Crossover", "Contemporary Christian",
    "Christian Rock", "Merengue", "Salsa", "Thrash Metal", "Anime", "JPop",
    "Synthpop")
