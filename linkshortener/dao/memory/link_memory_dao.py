"""In-process implementation of LinkBaseDAO

Keeps key to target mappings in a dictionary. Suited for single-process
servers, local development and tests. Mappings never expire.

Example:
    >>> dao = LinkMemoryDAO()
    >>> dao.insert(LinkRecord(key='vq5ejng0p6', target='https://example.com'))
    <LinkMemoryDAO>
    >>> dao.count(increment=True)
    1
"""

import threading

from beartype import beartype

from linkshortener.models import LinkRecord
from linkshortener.dao.base import LinkBaseDAO
from linkshortener.dao.exceptions import LinkAlreadyExistsError, LinkNotFoundError


class LinkMemoryDAO(LinkBaseDAO):
    """Dictionary-backed DAO guarded by a lock."""

    def __init__(self):
        self._records: dict[str, LinkRecord] = {}
        self._counter = 0
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'

    def __len__(self) -> int:
        return len(self._records)

    @beartype
    def insert(self, record: LinkRecord, **kwargs) -> 'LinkMemoryDAO':
        with self._lock:
            if record.key in self._records:
                raise LinkAlreadyExistsError(f"Link with key '{record.key}' already exists.")
            self._records[record.key] = record
        return self

    @beartype
    def get(self, key: str, **kwargs) -> LinkRecord:
        with self._lock:
            record = self._records.get(key)
        if record is None:
            raise LinkNotFoundError(f"Link with key '{key}' not found.")
        return record

    def count(self, increment: bool = False, **kwargs) -> int:
        with self._lock:
            if increment:
                self._counter += 1
            return self._counter
