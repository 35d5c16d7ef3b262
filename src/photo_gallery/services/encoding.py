"""Decoding of base64 data-URL upload payloads."""

import base64
import binascii
import re
from dataclasses import dataclass

from photo_gallery.domain.errors import InvalidEncoding

_DATA_URL_RE = re.compile(r"^data:([A-Za-z\-+/.]+);base64,(.+)$", re.DOTALL)

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/heic": "heic",
}


@dataclass(frozen=True)
class DecodedImage:
    """Raw bytes and declared media type of an upload."""

    content_type: str
    data: bytes

    @property
    def extension(self) -> str:
        """File extension for the declared media type."""
        return _EXTENSIONS.get(self.content_type.lower(), "jpg")


def decode_data_url(payload: object) -> DecodedImage:
    """Decode a ``data:<media-type>;base64,<body>`` string.

    Raises InvalidEncoding when the payload is not a string of that shape or
    the body is not valid base64.
    """
    if not isinstance(payload, str):
        raise InvalidEncoding("Invalid base64 string")
    match = _DATA_URL_RE.match(payload.strip())
    if match is None:
        raise InvalidEncoding("Invalid base64 string")
    content_type, body = match.groups()
    try:
        data = base64.b64decode("".join(body.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidEncoding("Invalid base64 string") from exc
    if not data:
        raise InvalidEncoding("Empty image payload")
    return DecodedImage(content_type=content_type, data=data)
