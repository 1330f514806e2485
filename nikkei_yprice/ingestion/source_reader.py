"""Input file loading with automatic charset detection.

Company lists are often exported from spreadsheets in Shift_JIS or CP932,
so the whole file is read once, the encoding is guessed from the bytes and
the buffer is decoded before any parsing happens.
"""

import codecs
from dataclasses import dataclass
from pathlib import Path

from charset_normalizer import from_bytes

from nikkei_yprice.shared.errors import EncodingUnknownError, InputNotFoundError


@dataclass(frozen=True)
class RawDocument:
    """Raw input bytes plus the detected encoding label."""

    content: bytes
    encoding: str


def load(path: Path | str) -> RawDocument:
    """Read a file and detect its text encoding.

    Args:
        path: Input file path.

    Returns:
        RawDocument with a codec name Python can decode with.

    Raises:
        InputNotFoundError: If the path does not exist.
        EncodingUnknownError: If no codec matches the detected charset.
        OSError: Any other read failure, unchanged.
    """
    path = Path(path)
    try:
        content = path.read_bytes()
    except FileNotFoundError as e:
        raise InputNotFoundError(path) from e

    if not content:
        return RawDocument(content=content, encoding="utf-8")

    best = from_bytes(content).best()
    charset = best.encoding if best is not None else None
    if charset is None:
        raise EncodingUnknownError(charset)

    try:
        encoding = codecs.lookup(charset).name
    except LookupError as e:
        raise EncodingUnknownError(charset) from e

    return RawDocument(content=content, encoding=encoding)


def decode(document: RawDocument) -> str:
    """Decode a RawDocument into canonical text, dropping a leading BOM."""
    text = document.content.decode(document.encoding)
    return text.removeprefix("\ufeff")


def read_text(path: Path | str) -> str:
    """Load and decode a file in one step."""
    return decode(load(path))
