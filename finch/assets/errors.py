# finch/assets/errors.py
from __future__ import annotations

from typing import Optional

E_MISSING_FILE = "E_MISSING_FILE"
E_MALFORMED_CONTAINER = "E_MALFORMED_CONTAINER"
E_FORMAT_TOO_LARGE = "E_FORMAT_TOO_LARGE"
E_TRUNCATED_DATA = "E_TRUNCATED_DATA"
E_MALFORMED_FACE = "E_MALFORMED_FACE"
E_INDEX_OUT_OF_RANGE = "E_INDEX_OUT_OF_RANGE"
E_UNSUPPORTED_FACE_ARITY = "E_UNSUPPORTED_FACE_ARITY"
E_MALFORMED_DIRECTIVE = "E_MALFORMED_DIRECTIVE"
E_UNSUPPORTED_SAMPLE_FORMAT = "E_UNSUPPORTED_SAMPLE_FORMAT"
E_RELEASED_CLIP = "E_RELEASED_CLIP"
E_UNSUPPORTED_ASSET = "E_UNSUPPORTED_ASSET"


class AssetError(Exception):
    """
    Base class for every failure raised while ingesting an asset.
    Fatal to the single decode call that raised it.
    """

    code = "E_ASSET"

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.line = line

    def __str__(self) -> str:
        text = f"{self.code}: {self.message}"
        if self.path is not None:
            where = self.path if self.line is None else f"{self.path}:{self.line}"
            text += f" ({where})"
        return text


class MissingFile(AssetError):
    code = E_MISSING_FILE


class ReleasedClip(AssetError):
    code = E_RELEASED_CLIP


class UnsupportedAsset(AssetError):
    code = E_UNSUPPORTED_ASSET


class DecodeError(AssetError, ValueError):
    """The source was opened but its content is not acceptable."""

    code = "E_DECODE"


class MalformedContainer(DecodeError):
    code = E_MALFORMED_CONTAINER


class FormatTooLarge(DecodeError):
    code = E_FORMAT_TOO_LARGE


class TruncatedData(DecodeError):
    code = E_TRUNCATED_DATA


class MalformedFace(DecodeError):
    code = E_MALFORMED_FACE


class IndexOutOfRange(DecodeError):
    code = E_INDEX_OUT_OF_RANGE


class UnsupportedFaceArity(DecodeError):
    code = E_UNSUPPORTED_FACE_ARITY


class MalformedDirective(DecodeError):
    code = E_MALFORMED_DIRECTIVE


class UnsupportedSampleFormat(DecodeError):
    code = E_UNSUPPORTED_SAMPLE_FORMAT


__all__ = [
    "AssetError",
    "MissingFile",
    "ReleasedClip",
    "UnsupportedAsset",
    "DecodeError",
    "MalformedContainer",
    "FormatTooLarge",
    "TruncatedData",
    "MalformedFace",
    "IndexOutOfRange",
    "UnsupportedFaceArity",
    "MalformedDirective",
    "UnsupportedSampleFormat",
]
