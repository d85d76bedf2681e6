"""
OCN-Signature header codec.

The serialized notary travels as a single header value:
base64(brotli(utf8(json))).
"""

import base64
import binascii

import brotli

from . import config
from .exceptions import SignatureFormatError
from .logging_config import audit_log


def compress(data: bytes) -> bytes:
    """Brotli-compress with the configured quality (4 by default)."""
    return brotli.compress(data, **config.compression_settings())


def decompress(data: bytes) -> bytes:
    """Brotli-decompress. Raises brotli.error on corrupt input."""
    return brotli.decompress(data)


def encode_header(payload: bytes) -> str:
    """Compress and base64-encode a serialized notary."""
    return base64.b64encode(compress(payload)).decode('ascii')


def decode_header(header: str) -> bytes:
    """
    Reverse of encode_header.

    Raises:
        SignatureFormatError: if the value is not base64 or not Brotli data
    """
    if not isinstance(header, str) or not header.strip():
        audit_log.header_rejected(config.SIGNATURE_HEADER, "empty")
        raise SignatureFormatError(config.SIGNATURE_HEADER, "cannot be empty")

    try:
        raw = base64.b64decode(header.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        audit_log.header_rejected(config.SIGNATURE_HEADER, "base64")
        raise SignatureFormatError(config.SIGNATURE_HEADER, "must be valid base64") from e

    try:
        return decompress(raw)
    except brotli.error as e:
        audit_log.header_rejected(config.SIGNATURE_HEADER, "brotli")
        raise SignatureFormatError(config.SIGNATURE_HEADER, "must be Brotli-compressed") from e
