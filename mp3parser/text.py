# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Decoding of ID3v2 text fields in their declared encoding."""

import codecs

from mp3parser.errors import *

LATIN1 = 0
UTF16 = 1
UTF16BE = 2
UTF8 = 3

# (name, terminator) for each encoding byte value
encodings = (('iso-8859-1', b"\x00"),
             ('utf-16', b"\x00\x00"),
             ('utf-16-be', b"\x00\x00"),
             ('utf-8', b"\x00"))

def _check_encoding(encoding):
    if not isinstance(encoding, int) or not 0 <= encoding < len(encodings):
        raise InvalidTextEncodingError("Invalid text encoding {0!r}".format(encoding))

def decode(data, encoding):
    "Decode the byte string data in the ID3v2 encoding given by its code."
    _check_encoding(encoding)
    data = bytes(data)
    if encoding == UTF16:
        if len(data) == 0:
            return ""
        if data[:2] == codecs.BOM_UTF16_LE:
            codec = "utf-16-le"
        elif data[:2] == codecs.BOM_UTF16_BE:
            codec = "utf-16-be"
        else:
            raise InvalidTextEncodingError(
                "Missing byte order mark in UTF-16 string {0!r}".format(data[:2]))
        data = data[2:]
    else:
        codec = encodings[encoding][0]
    try:
        return data.decode(codec)
    except UnicodeDecodeError as e:
        raise InvalidTextEncodingError(str(e)) from e

def split_terminated(data, encoding):
    """Split data at the first string terminator of the given encoding.

    Returns (before, after), with the terminator itself dropped.  UTF-16
    terminators are two zero bytes on an even offset.  If there is no
    terminator, the whole of data is the final field: (data, b"").
    """
    _check_encoding(encoding)
    term = encodings[encoding][1]
    if len(term) == 1:
        before, sep, after = bytes(data).partition(term)
        return before, after
    for i in range(0, len(data) - 1, 2):
        if data[i:i+2] == term:
            return bytes(data[:i]), bytes(data[i+2:])
    return bytes(data), b""

def strip_terminators(data, encoding):
    "Drop any string terminators from the end of data."
    _check_encoding(encoding)
    term = encodings[encoding][1]
    data = bytes(data)
    while data.endswith(term) and (len(term) == 1 or len(data) % 2 == 0):
        data = data[:-len(term)]
    return data

def split_all(data, encoding):
    "Split data into all of its terminated strings (raw bytes)."
    fields = []
    while data:
        field, data = split_terminated(data, encoding)
        fields.append(field)
    return fields
