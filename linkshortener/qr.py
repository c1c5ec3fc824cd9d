"""QR code rendering

The generator only needs a single capability from a QR library: turn a
payload string into an image, or fail. That contract is `QrRenderer`;
`QrEmitter` fulfils it with the `qrcode` library.

Classes:
    QrRenderer:
        Protocol of the rendering collaborator.
    QrEmitter(error_correction='M', max_version=40, box_size=10, border=4, image_format='svg'):
        `qrcode` based renderer producing SVG or PNG images.

Example:
    >>> from linkshortener.qr import QrEmitter
    >>> image = QrEmitter(error_correction='H').render('https://sho.rt/vq5ejng0p6')
    >>> image.media_type
    'image/svg+xml'
"""

import io
from typing import Protocol

import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage
from qrcode.image.svg import SvgPathImage

from linkshortener.models import QrImage
from linkshortener.exceptions import ConfigError, QrGenerationError


ERROR_CORRECTION_LEVELS = {
    'L': ERROR_CORRECT_L,
    'M': ERROR_CORRECT_M,
    'Q': ERROR_CORRECT_Q,
    'H': ERROR_CORRECT_H,
}

IMAGE_FORMATS = {
    'svg': (SvgPathImage, 'image/svg+xml'),
    'png': (PilImage, 'image/png'),
}

MAX_QR_VERSION = 40


class QrRenderer(Protocol):
    def render(self, payload: str) -> QrImage: ...


class QrEmitter:
    """Render payloads as QR codes with the `qrcode` library.

    The smallest QR version able to hold the payload is picked automatically,
    up to `max_version`.

    Attributes:
        error_correction (str):
            One of 'L', 'M', 'Q', 'H' (7%, 15%, 25%, 30% recoverable).
        max_version (int):
            Largest QR version (1-40) a payload may be fitted into.
        box_size (int):
            Pixels (or SVG units) per QR module.
        border (int):
            Quiet zone width in modules.
        image_format (str):
            'svg' (no Pillow needed) or 'png'.

    Raises:
        ConfigError: On construction with invalid parameters.
    """

    def __init__(
        self,
        error_correction: str = 'M',
        max_version: int = MAX_QR_VERSION,
        box_size: int = 10,
        border: int = 4,
        image_format: str = 'svg',
    ):
        if error_correction not in ERROR_CORRECTION_LEVELS:
            raise ConfigError(f'Error correction must be one of L, M, Q, H (given value: {error_correction!r}).')
        if isinstance(max_version, bool) or not isinstance(max_version, int) or not 1 <= max_version <= MAX_QR_VERSION:
            raise ConfigError(f'Maximum QR version must be an integer in [1, {MAX_QR_VERSION}] (given value: {max_version!r}).')
        if isinstance(box_size, bool) or not isinstance(box_size, int) or box_size < 1:
            raise ConfigError(f'Box size must be a positive integer (given value: {box_size!r}).')
        if isinstance(border, bool) or not isinstance(border, int) or border < 0:
            raise ConfigError(f'Border must be a non-negative integer (given value: {border!r}).')
        if image_format not in IMAGE_FORMATS:
            raise ConfigError(f"Image format must be 'svg' or 'png' (given value: {image_format!r}).")

        self.error_correction = error_correction
        self.max_version = max_version
        self.box_size = box_size
        self.border = border
        self.image_format = image_format

    def render(self, payload: str) -> QrImage:
        """Render the payload as a QR image.

        Args:
            payload (str):
                Text to encode (usually a short URL or a link key).

        Returns:
            QrImage: serialized image with its media type and QR version.

        Raises:
            QrGenerationError:
                If the payload is empty or does not fit into `max_version`
                at the configured error correction level.
        """
        if not isinstance(payload, str) or not payload:
            raise QrGenerationError(f'QR payload must be a non-empty string (given value: {payload!r}).')

        image_factory, media_type = IMAGE_FORMATS[self.image_format]
        qr = qrcode.QRCode(
            version=None,
            error_correction=ERROR_CORRECTION_LEVELS[self.error_correction],
            box_size=self.box_size,
            border=self.border,
            image_factory=image_factory,
        )
        qr.add_data(payload)
        try:
            qr.make(fit=True)
        except DataOverflowError as e:
            raise QrGenerationError(f'Payload of {len(payload)} characters does not fit into any QR version.') from e

        if qr.version > self.max_version:
            raise QrGenerationError(
                f'Payload of {len(payload)} characters needs QR version {qr.version} '
                f'(maximum allowed: {self.max_version}, error correction: {self.error_correction}).'
            )

        buffer = io.BytesIO()
        qr.make_image().save(buffer)
        return QrImage(content=buffer.getvalue(), media_type=media_type, version=qr.version)
