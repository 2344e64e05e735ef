"""Helpers for working with ``data:`` URLs.

A data URL has the form ``data:<mime>;base64,<payload>``. Only the payload
segment after the first comma is decoded; the declared MIME type is inferred
loosely (PNG if the URL mentions ``image/png``, JPEG otherwise).
"""

import base64
import binascii

DATA_URL_PREFIX = "data:"
PNG_MIME_TYPE = "image/png"
JPEG_MIME_TYPE = "image/jpeg"


class InvalidDataUrlError(ValueError):
    """Raised when a string is not a usable base64 data URL."""


def infer_mime_type(data_url: str) -> str:
    """Return ``image/png`` if the URL declares PNG, otherwise ``image/jpeg``."""
    return PNG_MIME_TYPE if PNG_MIME_TYPE in data_url else JPEG_MIME_TYPE


def parse_data_url(data_url: str, strict: bool = True) -> tuple[bytes, str]:
    """
    Decode the payload of a data URL.

    Args:
        data_url: The data URL string
        strict: Require the ``data:`` prefix (history images are parsed leniently)

    Returns:
        Tuple of (decoded bytes, inferred MIME type)

    Raises:
        InvalidDataUrlError: If the prefix is missing, there is no payload
            segment, or the payload is not valid base64
    """
    if strict and not data_url.startswith(DATA_URL_PREFIX):
        raise InvalidDataUrlError("Invalid image data URL format")

    segments = data_url.split(",")
    if len(segments) < 2:
        raise InvalidDataUrlError("Invalid image data URL format")

    try:
        data = base64.b64decode(segments[1], validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidDataUrlError(f"Invalid base64 image payload: {str(e)}") from e

    return data, infer_mime_type(data_url)


def build_data_url(data: bytes, mime_type: str) -> str:
    """Encode bytes as a base64 data URL."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"{DATA_URL_PREFIX}{mime_type};base64,{encoded}"


def extension_for_mime_type(mime_type: str) -> str:
    """File extension for a stored image: ``png`` for PNG, ``jpg`` for everything else."""
    return "png" if mime_type == PNG_MIME_TYPE else "jpg"
