#!/usr/bin/env python3

from setuptools import setup;

setup(
    name="mp3parser",
    version="0.1.0",
    packages=["mp3parser"],
    python_requires=">=3.6",
    license="BSD",
    description="ID3v1/ID3v2 tag and MPEG frame header parsing in pure Python 3",
    long_description="""
mp3parser reads the structure of MP3 files held in memory: ID3v2 tags
and their frames, ID3v1 trailers, and MPEG audio frame headers, without
decoding any audio.  It never touches the file system; every function
takes a bytes-like buffer and an offset.
""",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Topic :: Multimedia :: Sound/Audio"
        ],
    )
