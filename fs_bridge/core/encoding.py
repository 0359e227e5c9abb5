# fs_bridge/core/encoding.py - Encoding label resolution and strict text conversion
#
# Labels follow the WHATWG Encoding Standard table (via webencodings), so
# "latin1" means windows-1252 and "gb2312" means GBK, as in a browser.

import logging
from typing import Optional, Tuple

import webencodings

from .errors import ErrorKind, FsOperationError

logger = logging.getLogger(__name__)

FALLBACK_ENCODING = webencodings.UTF8


def lookup_encoding(label: Optional[str] = None) -> webencodings.Encoding:
    """
    Resolves an encoding label to a webencodings Encoding.

    Labels are matched case-insensitively with surrounding whitespace ignored.
    Absent, empty or unknown labels resolve to UTF-8.
    """
    if label is None or not label.strip():
        return FALLBACK_ENCODING
    encoding = webencodings.lookup(label)
    if encoding is None:
        logger.debug(f"Unknown encoding label '{label}', using {FALLBACK_ENCODING.name}")
        return FALLBACK_ENCODING
    return encoding


def resolve_encoding(label: Optional[str] = None) -> str:
    """Returns the canonical WHATWG name for a label, e.g. 'gbk' or 'windows-1252'."""
    return lookup_encoding(label).name


def decode_bytes(data: bytes, label: Optional[str] = None) -> Tuple[str, str]:
    """
    Strictly decodes file bytes. A leading UTF-8/UTF-16 BOM overrides the label and is stripped.

    Returns:
        (text, encoding_name) where encoding_name is the encoding actually used.

    Raises:
        FsOperationError: kind InvalidEncoding if any byte sequence is invalid.
    """
    encoding = lookup_encoding(label)
    try:
        text, used = webencodings.decode(data, encoding, errors="strict")
    except UnicodeDecodeError as e:
        used_name = e.encoding or encoding.name
        logger.warning(f"Decoding with '{used_name}' failed at byte {e.start}: {e.reason}")
        raise FsOperationError(
            ErrorKind.INVALID_ENCODING,
            f"Decoding file content with {encoding.name} encoding failed",
        ) from e
    return text, used.name


def encode_text(text: str, label: Optional[str] = None) -> Tuple[bytes, str]:
    """
    Strictly encodes text for writing.

    Raises:
        FsOperationError: kind InvalidEncoding if any character cannot be represented.
    """
    encoding = lookup_encoding(label)
    try:
        data = webencodings.encode(text, encoding, errors="strict")
    except UnicodeEncodeError as e:
        logger.warning(f"Encoding with '{encoding.name}' failed at character {e.start}: {e.reason}")
        raise FsOperationError(
            ErrorKind.INVALID_ENCODING,
            f"Encoding file content with {encoding.name} encoding failed",
        ) from e
    return data, encoding.name
