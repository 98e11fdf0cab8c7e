"""Decode result codes and the exceptions that carry them."""

from enum import IntEnum


class DecodeResult(IntEnum):
    """Result codes returned by Decoder.decode()."""

    OK = 0
    NO_JPEG = 1
    UNSUPPORTED = 2
    OUT_OF_MEMORY = 3
    INTERNAL_ERROR = 4
    SYNTAX_ERROR = 5


class JPEGDecodeError(Exception):
    """Base class for decode failures. `result` is never OK."""

    result = DecodeResult.INTERNAL_ERROR

    def __init__(self, message: str = ""):
        super().__init__(message or self.result.name)


class NotAJPEGError(JPEGDecodeError):
    result = DecodeResult.NO_JPEG


class UnsupportedJPEGError(JPEGDecodeError):
    result = DecodeResult.UNSUPPORTED


class JPEGSyntaxError(JPEGDecodeError):
    result = DecodeResult.SYNTAX_ERROR


class DecoderMemoryError(JPEGDecodeError):
    result = DecodeResult.OUT_OF_MEMORY


class DecoderInternalError(JPEGDecodeError):
    result = DecodeResult.INTERNAL_ERROR


_ERRORS = {cls.result: cls for cls in (
    NotAJPEGError,
    UnsupportedJPEGError,
    JPEGSyntaxError,
    DecoderMemoryError,
    DecoderInternalError,
)}


def error_for(result: DecodeResult, message: str = "") -> JPEGDecodeError:
    """Build the exception matching a failure code."""
    if result == DecodeResult.OK:
        raise ValueError("OK is not an error")
    return _ERRORS[result](message)
