"""Link issuance with persistence under a single lock

LinkGenerator leaves synchronization to its caller. LinkService is that
caller for long-lived processes: it owns one lock guarding both the
generator's counter and the data store, so a key is never issued without its
mapping being stored in the same critical section.

Example:
    >>> from linkshortener.dao.memory import LinkMemoryDAO
    >>> service = LinkService(LinkGenerator('/redirect', min_length=10), LinkMemoryDAO())
    >>> link = service.shorten('https://example.com')
    >>> service.resolve(link.key)
    'https://example.com'
"""

import logging
import threading
from collections.abc import Callable
from typing import Optional

from linkshortener.dao.base import LinkBaseDAO
from linkshortener.dao.exceptions import LinkNotFoundError
from linkshortener.exceptions import ConfigError, DecodeError
from linkshortener.generator import LinkGenerator
from linkshortener.models import Link, LinkRecord, QrImage


logger = logging.getLogger(__name__)


class LinkService:
    """Pair a LinkGenerator with a LinkBaseDAO behind one lock.

    Attributes:
        generator (LinkGenerator):
            Generator issuing keys. Must not be used outside `with_lock()`.
        dao (LinkBaseDAO):
            Store of key to target mappings.
    """

    def __init__(self, generator: LinkGenerator, dao: LinkBaseDAO, lock: Optional[threading.Lock] = None):
        self.generator = generator
        self.dao = dao
        self._lock = lock if lock is not None else threading.Lock()

    def with_lock[T](self, func: Callable[[LinkGenerator, LinkBaseDAO], T]) -> T:
        """Run `func(generator, dao)` while holding the service lock."""
        with self._lock:
            return func(self.generator, self.dao)

    def shorten(self, target_url: str) -> Link:
        """Issue a link for the target URL and persist the mapping.

        Raises:
            CounterOverflowError: If the generator is exhausted.
            LinkAlreadyExistsError: If the issued key is already stored.
            DataStoreError: On data store failures.
        """

        def issue(generator: LinkGenerator, dao: LinkBaseDAO) -> Link:
            link = generator.generate_url()
            dao.insert(LinkRecord(key=link.key, target=target_url))
            return link

        link = self.with_lock(issue)
        logger.info('Shortened URL.', extra={'key': link.key, 'target': target_url})
        return link

    def shorten_with_qr(self, target_url: str) -> tuple[QrImage, Link]:
        """Issue and persist a link, then render its QR code.

        The mapping is stored before rendering, so a QrGenerationError leaves
        a working short link behind.

        Raises:
            ConfigError: If the generator has no QR emitter (no key is issued).
            QrGenerationError: If rendering fails (the link stays stored).
        """
        if self.generator.qr_emitter is None:
            raise ConfigError('QR rendering is not enabled for this generator.')

        link = self.shorten(target_url)
        image = self.generator.render_qr(link)
        logger.info('Shortened URL with QR code.', extra={'key': link.key, 'target': target_url, 'qrVersion': image.version})
        return image, link

    def resolve(self, key: str) -> str:
        """Return the target URL of a key.

        Keys the generator's codec cannot decode are rejected without a
        data store lookup.

        Raises:
            LinkNotFoundError: If the key is invalid or unknown.
            DataStoreError: On data store failures.
        """
        try:
            self.generator.codec.decode(key)
        except DecodeError as e:
            raise LinkNotFoundError(f"Link with key '{key}' not found.") from e
        return self.dao.get(key).target
