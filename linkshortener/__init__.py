"""Generate hash-id based URLs and QR codes for use in URL shortening services."""

from linkshortener.codec import HashIdCodec
from linkshortener.generator import LinkGenerator
from linkshortener.models import Link, LinkRecord, QrImage
from linkshortener.qr import QrEmitter
from linkshortener.constants import QrPayload
from linkshortener.exceptions import (
    LinkShortenerError,
    ConfigError,
    DecodeError,
    CounterOverflowError,
    QrGenerationError,
)


__all__ = [
    'HashIdCodec',
    'LinkGenerator',
    'Link',
    'LinkRecord',
    'QrImage',
    'QrEmitter',
    'QrPayload',
    'LinkShortenerError',
    'ConfigError',
    'DecodeError',
    'CounterOverflowError',
    'QrGenerationError',
]
