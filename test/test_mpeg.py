# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest
import struct
import warnings

import mp3parser
import mp3parser.mpeg as mpeg
from mp3parser.mpeg import *

# MPEG-1 layer III, 128 kbps, 44.1 kHz, stereo
MP3_HEADER = b"\xff\xfb\x90\x00"
MP3_FRAME_LENGTH = 417

def frame(header=MP3_HEADER, length=MP3_FRAME_LENGTH, payload=b""):
    return header + payload + bytes(length - len(header) - len(payload))

def xing_frame(marker=b"Xing", flags=0x0F, frames=100, nbytes=65536,
               header=MP3_HEADER, side_info=32):
    payload = bytes(side_info) + marker + struct.pack("!I", flags)
    if flags & 0x1:
        payload += struct.pack("!I", frames)
    if flags & 0x2:
        payload += struct.pack("!I", nbytes)
    if flags & 0x4:
        payload += bytes(range(100))
    if flags & 0x8:
        payload += struct.pack("!I", 50)
    return frame(header, payload=payload)

def id3v1_tag():
    return b"TAG" + bytes(125)

class FrameHeaderTestCase(unittest.TestCase):
    def testMpeg1Layer3(self):
        header = read_frame_header(MP3_HEADER)
        self.assertEqual(header.offset, 0)
        self.assertEqual(header.version, 1)
        self.assertEqual(header.layer, 3)
        self.assertFalse(header.protected)
        self.assertEqual(header.bitrate_kbps, 128)
        self.assertEqual(header.sample_rate_hz, 44100)
        self.assertFalse(header.padding)
        self.assertEqual(header.channel_mode, STEREO)
        self.assertEqual(header.channels, 2)
        self.assertEqual(header.samples, 1152)
        self.assertEqual(header.frame_length, 417)
        self.assertAlmostEqual(header.duration_ms, 26.1224, places=3)
        self.assertFalse(header.free_format)

    def testPadding(self):
        header = read_frame_header(b"\xff\xfb\x92\x00")
        self.assertTrue(header.padding)
        self.assertEqual(header.frame_length, 418)

    def testFlags(self):
        # Protected, private, mono, copyright, original, emphasis 50/15
        header = read_frame_header(b"\xff\xfa\x91\xcd")
        self.assertTrue(header.protected)
        self.assertTrue(header.private)
        self.assertEqual(header.channel_mode, MONO)
        self.assertEqual(header.channels_str, "mono")
        self.assertEqual(header.channels, 1)
        self.assertTrue(header.copyright)
        self.assertTrue(header.original)
        self.assertEqual(header.emphasis, 1)
        self.assertEqual(header.side_info_size, 17)

    def testModeExtension(self):
        header = read_frame_header(b"\xff\xfb\x90\x60")
        self.assertEqual(header.channel_mode, JOINT_STEREO)
        self.assertEqual(header.mode_extension, 2)
        self.assertEqual(header.side_info_size, 32)

    def testMpeg2Layer3(self):
        header = read_frame_header(b"\xff\xf3\x80\x00")
        self.assertEqual(header.version, 2)
        self.assertEqual(header.layer, 3)
        self.assertEqual(header.bitrate_kbps, 64)
        self.assertEqual(header.sample_rate_hz, 22050)
        self.assertEqual(header.samples, 576)
        self.assertEqual(header.frame_length, 208)
        self.assertEqual(header.side_info_size, 17)

    def testMpeg25Layer3(self):
        header = read_frame_header(b"\xff\xe3\x18\xc0")
        self.assertEqual(header.version, 2.5)
        self.assertEqual(header.bitrate_kbps, 8)
        self.assertEqual(header.sample_rate_hz, 8000)
        self.assertEqual(header.frame_length, 72)
        self.assertEqual(header.duration_ms, 72.0)
        self.assertEqual(header.side_info_size, 9)

    def testLayer1(self):
        header = read_frame_header(b"\xff\xff\xc0\x00")
        self.assertEqual(header.layer, 1)
        self.assertEqual(header.bitrate_kbps, 384)
        self.assertEqual(header.samples, 384)
        self.assertEqual(header.frame_length, 416)
        padded = read_frame_header(b"\xff\xff\xc2\x00")
        self.assertEqual(padded.frame_length, 420)

    def testLayer2(self):
        header = read_frame_header(b"\xff\xfd\xa4\x00")
        self.assertEqual(header.layer, 2)
        self.assertEqual(header.bitrate_kbps, 192)
        self.assertEqual(header.sample_rate_hz, 48000)
        self.assertEqual(header.frame_length, 576)

    def testInvalid(self):
        for data in (b"",
                     b"\xff\xfb\x90",          # too short
                     b"\xfe\xfb\x90\x00",      # bad sync
                     b"\xff\xdb\x90\x00",      # bad sync in second byte
                     b"\xff\xeb\x90\x00",      # reserved version
                     b"\xff\xf9\x90\x00",      # reserved layer
                     b"\xff\xfb\xf0\x00",      # bitrate index 15
                     b"\xff\xfb\x9c\x00"):     # sample rate index 3
            self.assertIsNone(read_frame_header(data), repr(data))

    def testOffset(self):
        data = b"\x00\x00" + MP3_HEADER
        self.assertIsNone(read_frame_header(data))
        self.assertEqual(read_frame_header(data, 2).offset, 2)
        self.assertIsNone(read_frame_header(data, 3))
        self.assertIsNone(read_frame_header(data, -1))

    def testFreeFormat(self):
        header = read_frame_header(b"\xff\xfb\x00\x00")
        self.assertTrue(header.free_format)
        self.assertIsNone(header.bitrate_kbps)
        self.assertIsNone(header.frame_length)
        self.assertIn("free", str(header))

    def testEquality(self):
        self.assertEqual(read_frame_header(MP3_HEADER), read_frame_header(MP3_HEADER))
        self.assertNotEqual(read_frame_header(MP3_HEADER),
                            read_frame_header(b"\x00" + MP3_HEADER, 1))
        self.assertIn("MPEG-1 layer 3", repr(read_frame_header(MP3_HEADER)))

    def testBufferTypes(self):
        for data in (bytearray(MP3_HEADER), memoryview(MP3_HEADER)):
            self.assertEqual(read_frame_header(data).frame_length, 417)


class FrameWalkTestCase(unittest.TestCase):
    def testIterFrames(self):
        data = frame() * 3
        headers = list(iter_frame_headers(data))
        self.assertEqual([h.offset for h in headers], [0, 417, 834])
        self.assertEqual(list(iter_frame_headers(data, 417)), headers[1:])

    def testMixedPadding(self):
        data = frame() + frame(b"\xff\xfb\x92\x00", 418) + frame()
        self.assertEqual([h.offset for h in iter_frame_headers(data)], [0, 417, 835])

    def testStopsAtGarbage(self):
        data = frame() * 2 + b"garbage" + frame()
        self.assertEqual(len(list(iter_frame_headers(data))), 2)

    def testStopsAfterFreeFormat(self):
        data = frame(b"\xff\xfb\x00\x00", 500) + frame()
        headers = list(iter_frame_headers(data))
        self.assertEqual(len(headers), 1)
        self.assertTrue(headers[0].free_format)

    def testEmpty(self):
        self.assertEqual(list(iter_frame_headers(b"")), [])
        self.assertEqual(list(iter_frame_headers(frame(), 417)), [])

    def testFind(self):
        data = b"\x00\x01\xff\x00" + frame()
        header, offset = find_frame_header(data)
        self.assertEqual(offset, 4)
        self.assertEqual(header.offset, 4)
        self.assertEqual(find_frame_header(data, 4)[1], 4)
        self.assertEqual(find_frame_header(data, 0, limit=4), (None, 4))
        self.assertEqual(find_frame_header(data, 5), (None, len(data)))

    def testFindNothing(self):
        self.assertEqual(find_frame_header(b""), (None, 0))
        self.assertEqual(find_frame_header(bytes(100)), (None, 100))
        self.assertEqual(find_frame_header(b"\xff" * 10), (None, 10))

    def testLastFrame(self):
        data = frame() * 3
        self.assertEqual(read_last_frame_header(data).offset, 834)
        self.assertEqual(read_last_frame_header(data + id3v1_tag()).offset, 834)
        self.assertIsNone(read_last_frame_header(data + b"\x00\x00"))
        self.assertIsNone(read_last_frame_header(b""))
        self.assertIsNone(read_last_frame_header(bytes(5000)))


class XingTestCase(unittest.TestCase):
    def testXing(self):
        data = xing_frame() + frame()
        xing = read_xing_tag(data)
        self.assertEqual(xing.marker, "Xing")
        self.assertEqual(xing.frames, 100)
        self.assertEqual(xing.bytes, 65536)
        self.assertEqual(xing.toc, list(range(100)))
        self.assertEqual(xing.quality, 50)

    def testInfo(self):
        data = xing_frame(b"Info", flags=0x1, frames=7,
                          header=b"\xff\xfb\x90\xc0", side_info=17)
        xing = read_xing_tag(data)
        self.assertEqual(xing.marker, "Info")
        self.assertEqual(xing.frames, 7)
        self.assertIsNone(xing.bytes)
        self.assertIsNone(xing.toc)
        self.assertIsNone(xing.quality)

    def testNoXing(self):
        self.assertIsNone(read_xing_tag(frame()))
        self.assertIsNone(read_xing_tag(b""))
        self.assertIsNone(read_xing_tag(b"\xff\xfd\xa4\x00" + bytes(572)))
        self.assertIsNone(read_xing_tag(MP3_HEADER + bytes(20)))

    def testTruncated(self):
        # Flags announce all four fields, but the buffer ends after them
        data = MP3_HEADER + bytes(32) + b"Xing" + struct.pack("!I", 0x0F)
        self.assertIsNone(read_xing_tag(data))
        self.assertIsNone(read_xing_tag(xing_frame()[:150]))
        xing = read_xing_tag(xing_frame(flags=0x3)[:52])
        self.assertEqual((xing.frames, xing.bytes), (100, 65536))


class DurationTestCase(unittest.TestCase):
    def testWalk(self):
        data = frame() * 10
        self.assertAlmostEqual(stream_duration(data), 10 * 1152000 / 44100)

    def testXing(self):
        data = xing_frame(frames=1000) + frame() * 2
        self.assertAlmostEqual(stream_duration(data), 1000 * 1152000 / 44100)

    def testLeadingTag(self):
        tag = b"ID3\x03\x00\x00\x00\x00\x00\x20" + bytes(32)
        data = tag + frame() * 4 + id3v1_tag()
        self.assertAlmostEqual(stream_duration(data), 4 * 1152000 / 44100)
        self.assertAlmostEqual(stream_duration(data, len(tag) + 417),
                               3 * 1152000 / 44100)

    def testTruncatedLeadingTag(self):
        # The tag claims 2048 bytes, but the buffer is shorter
        tag = b"ID3\x03\x00\x00" + bytes((0, 0, 0x10, 0)) + bytes(7)
        data = tag + frame() * 3
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", mp3parser.Warning)
            self.assertAlmostEqual(stream_duration(data), 3 * 1152000 / 44100)

    def testJunkBeforeFirstFrame(self):
        data = b"\x00" * 10 + frame() * 2
        self.assertAlmostEqual(stream_duration(data), 2 * 1152000 / 44100)

    def testEmpty(self):
        self.assertEqual(stream_duration(b""), 0.0)
        self.assertEqual(stream_duration(bytes(100)), 0.0)


suite = unittest.TestSuite()
for case in (FrameHeaderTestCase, FrameWalkTestCase, XingTestCase, DurationTestCase):
    suite.addTest(unittest.TestLoader().loadTestsFromTestCase(case))

if __name__ == "__main__":
    warnings.simplefilter("always", mp3parser.Warning)
    unittest.main(defaultTest="suite")
