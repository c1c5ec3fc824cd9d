"""Abstract base class for link data access objects (DAOs).

This class establishes a consistent contract for all link DAO implementations,
regardless of the underlying storage mechanism (e.g., in-process memory, Redis).

Responsibilities:
    - Provide an interface for inserting and retrieving LinkRecord objects.
    - Keep a counter that generators can resume from or reserve values with.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.models import LinkRecord
        >>> from linkshortener.dao.memory import LinkMemoryDAO

        >>> dao = LinkMemoryDAO()
        >>> dao.insert(LinkRecord(key='vq5ejng0p6', target='https://example.com/blog/article-123'))

        >>> dao.get('vq5ejng0p6').target
        'https://example.com/blog/article-123'
"""

from abc import ABC, abstractmethod

from linkshortener.models import LinkRecord


class LinkBaseDAO(ABC):
    """Interface for link data access objects (DAOs).

    Methods:
        insert(record: LinkRecord, **kwargs) -> LinkBaseDAO:
            Insert a new key to target mapping.
            Raises LinkAlreadyExistsError if the key already exists.
            Raises DataStoreError on connection or write failure.

        get(key: str, **kwargs) -> LinkRecord:
            Retrieve a mapping by key.
            Raises LinkNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        count(increment: bool, **kwargs) -> int:
            Return counter from data store.
            Optionally increment counter before retrieving.
            Raises DataStoreError on connection or read failure.
    """

    @abstractmethod
    def insert(self, record: LinkRecord, **kwargs) -> 'LinkBaseDAO':
        """Insert a new LinkRecord into the data store.

        Args:
            record (LinkRecord):
                The mapping to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkBaseDAO: self (for method chaining)

        Raises:
            LinkAlreadyExistsError:
                If a mapping with the same key already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, key: str, **kwargs) -> LinkRecord:
        """Retrieve a LinkRecord from the data store by its key.

        Raises:
            LinkNotFoundError:
                If no mapping with the given key exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def count(self, increment: bool = False, **kwargs) -> int:
        """Retrieve the current counter value from the data store.

        Args:
            increment (bool):
                If True, increment the counter by 1 before returning the value.

        Returns:
            int: The current counter value (0 when never incremented).

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
