# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

class Error(Exception): pass

class Warning(Error, UserWarning): pass

class FrameWarning(Warning): pass
class UnknownFrameWarning(FrameWarning): pass
class UnsupportedFrameWarning(FrameWarning): pass

class TagWarning(Warning): pass
class UnsyncWarning(TagWarning): pass

class OutOfBoundsError(Error, EOFError): pass
class InvalidSyncSafeByteError(Error, ValueError): pass
class TagError(Error, ValueError): pass
class FrameError(Error, ValueError): pass
class TruncatedFrameError(FrameError): pass
class InvalidTextEncodingError(FrameError): pass
