"""Counter based short link generation

LinkGenerator issues one hash-id key per call by encoding an internal counter
with a HashIdCodec, and joins the key to a base path to form the short URL.

Thread safety:
    The codec is immutable and may be shared freely. The generator's counter
    is NOT synchronized: callers sharing a generator between threads must
    serialize access themselves, ideally together with persisting the issued
    key (see `linkshortener.service.LinkService.with_lock`).

Counter policy:
    The counter holds the next value to issue. It starts at `initial_counter`
    (0 by default), advances by one per issued key and never wraps: once
    every value up to 2**64 - 1 has been issued, `generate_key()` raises
    CounterOverflowError.

Example:
    >>> from linkshortener.generator import LinkGenerator
    >>> generator = LinkGenerator('/some/redirect', min_length=10)
    >>> generator.generate_url()
    Link(key='vq5ejng0p6', url='/some/redirect/vq5ejng0p6')
"""

import logging
from typing import Optional

from linkshortener.codec import HashIdCodec
from linkshortener.constants import Alphabet, HashIdParameters, QrPayload
from linkshortener.exceptions import ConfigError, CounterOverflowError, QrGenerationError
from linkshortener.models import Link, QrImage
from linkshortener.qr import QrEmitter, QrRenderer


logger = logging.getLogger(__name__)


def join_url(base_path: str, key: str) -> str:
    """Join base path and key with exactly one '/' between them.

    Example:
        >>> join_url('/some/redirect', 'abc')
        '/some/redirect/abc'
        >>> join_url('https://sho.rt/', 'abc')
        'https://sho.rt/abc'
    """
    return base_path + key if base_path.endswith('/') else f'{base_path}/{key}'


class LinkGenerator:
    """Issue short links from a monotonically increasing counter.

    Attributes:
        base_path (str):
            Path (or absolute URL) every short URL starts with.
        counter (int):
            Next counter value to be encoded.
        codec (HashIdCodec):
            Codec turning counter values into keys.
        qr_emitter (Optional[QrRenderer]):
            Rendering collaborator used by `generate_qr()`.
        qr_payload (QrPayload):
            Whether QR codes carry the full URL or only the key.

    Raises:
        ConfigError:
            If the base path, initial counter, codec parameters or QR payload
            are invalid.
    """

    def __init__(
        self,
        base_path: str,
        min_length: int = 0,
        *,
        salt: str = '',
        alphabet: str = Alphabet.LINK,
        initial_counter: int = 0,
        codec: Optional[HashIdCodec] = None,
        qr_emitter: Optional[QrRenderer] = None,
        qr_payload: QrPayload | str = QrPayload.URL,
    ):
        if not isinstance(base_path, str):
            raise ConfigError(f'Base path must be of type string (given type: {type(base_path)}).')
        if isinstance(initial_counter, bool) or not isinstance(initial_counter, int):
            raise ConfigError(f'Initial counter must be of type integer (given type: {type(initial_counter)}).')
        if not 0 <= initial_counter <= HashIdParameters.MAX_VALUE:
            raise ConfigError(f'Initial counter must be in [0, {HashIdParameters.MAX_VALUE}] (given value: {initial_counter}).')
        try:
            qr_payload = QrPayload(qr_payload)
        except ValueError as e:
            raise ConfigError(f"QR payload must be 'url' or 'key' (given value: {qr_payload!r}).") from e

        self._base_path = base_path
        self._counter = initial_counter
        self._codec = codec if codec is not None else HashIdCodec(salt=salt, min_length=min_length, alphabet=alphabet)
        self.qr_emitter = qr_emitter
        self.qr_payload = qr_payload

    @classmethod
    def from_settings(cls, settings, initial_counter: Optional[int] = None) -> 'LinkGenerator':
        """Build a generator (with a QR emitter) from GeneratorSettings.

        Args:
            settings (GeneratorSettings):
                Parsed configuration, see `linkshortener.utils.config.generator_settings()`.
            initial_counter (Optional[int]):
                Overrides `settings.initial_counter`, e.g. with a value
                reserved from a shared data store.
        """
        return cls(
            settings.base_path,
            settings.min_length,
            salt=settings.salt,
            alphabet=settings.alphabet,
            initial_counter=settings.initial_counter if initial_counter is None else initial_counter,
            qr_emitter=QrEmitter(error_correction=settings.qr_error_correction, max_version=settings.qr_max_version),
            qr_payload=settings.qr_payload,
        )

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def counter(self) -> int:
        return self._counter

    @property
    def codec(self) -> HashIdCodec:
        return self._codec

    def generate_key(self) -> str:
        """Encode the current counter value and advance the counter.

        Returns:
            str: newly issued key.

        Raises:
            CounterOverflowError:
                If every encodable counter value has already been issued.
        """
        if self._counter > HashIdParameters.MAX_VALUE:
            raise CounterOverflowError(f'Counter exhausted: every value up to {HashIdParameters.MAX_VALUE} was issued.')

        key = self._codec.encode(self._counter)
        self._counter += 1
        logger.debug('Issued link key.', extra={'key': key, 'counter': self._counter - 1})
        return key

    def generate_url(self) -> Link:
        """Issue a new key and build its short URL."""
        key = self.generate_key()
        return Link(key=key, url=join_url(self._base_path, key))

    def generate_qr(self) -> tuple[QrImage, Link]:
        """Issue a new link and render it as a QR code.

        The QR code carries `link.url` or `link.key` depending on
        `qr_payload`. A failed render does not roll the counter back: the
        key is consumed either way.

        Returns:
            tuple[QrImage, Link]: rendered QR image and the issued link.

        Raises:
            ConfigError:
                If no QR emitter is configured (no key is issued).
            QrGenerationError:
                If the emitter fails to render the payload.
        """
        if self.qr_emitter is None:
            raise ConfigError('QR rendering is not enabled for this generator.')

        link = self.generate_url()
        return self.render_qr(link), link

    def render_qr(self, link: Link) -> QrImage:
        """Render an already issued link as a QR code.

        Raises:
            ConfigError:
                If no QR emitter is configured.
            QrGenerationError:
                If the emitter fails to render the payload.
        """
        if self.qr_emitter is None:
            raise ConfigError('QR rendering is not enabled for this generator.')

        payload = link.url if self.qr_payload is QrPayload.URL else link.key
        try:
            image = self.qr_emitter.render(payload)
        except QrGenerationError:
            logger.warning('QR rendering failed, key stays consumed.', extra={'key': link.key})
            raise
        except Exception as e:
            logger.warning('QR rendering failed, key stays consumed.', extra={'key': link.key})
            raise QrGenerationError(f'QR rendering failed for link {link.url!r}.') from e
        return image
