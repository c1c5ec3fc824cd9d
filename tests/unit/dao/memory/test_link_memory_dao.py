"""Unit tests for the LinkMemoryDAO

Test coverage includes:

1. Insertion behavior
   - Ensures inserted records can be retrieved.
   - Confirms duplicate keys raise LinkAlreadyExistsError.
   - Ensures invalid types raise TypeError or BeartypeCallHintParamViolation.

2. Retrieval behavior
   - Confirms missing keys raise LinkNotFoundError.

3. Counter operations
   - Ensures the counter starts at 0 and increments by one.
"""

import re

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from linkshortener.models import LinkRecord
from linkshortener.dao.memory import LinkMemoryDAO
from linkshortener.dao.exceptions import LinkAlreadyExistsError, LinkNotFoundError


@pytest.fixture
def dao():
    return LinkMemoryDAO()


# -------------------------------
# 1. Insertion behavior
# -------------------------------


def test_insert_and_get(dao):
    record = LinkRecord(key='vq5ejng0p6', target='https://example.com/test')

    assert dao.insert(record) is dao
    assert dao.get('vq5ejng0p6') == record
    assert len(dao) == 1
    assert repr(dao) == '<LinkMemoryDAO>'


def test_insert_duplicate_key(dao):
    dao.insert(LinkRecord(key='vq5ejng0p6', target='https://example.com/first'))

    with pytest.raises(LinkAlreadyExistsError, match=re.escape("Link with key 'vq5ejng0p6' already exists.")):
        dao.insert(LinkRecord(key='vq5ejng0p6', target='https://example.com/second'))

    assert dao.get('vq5ejng0p6').target == 'https://example.com/first'


def test_insert_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.insert('https://example.com/notarecord')


# -------------------------------
# 2. Retrieval behavior
# -------------------------------


def test_get_missing_key(dao):
    with pytest.raises(LinkNotFoundError, match=re.escape("Link with key 'missing' not found.")):
        dao.get('missing')


def test_get_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.get(123)


# -------------------------------
# 3. Counter operations
# -------------------------------


def test_count(dao):
    assert dao.count() == 0
    assert dao.count(increment=True) == 1
    assert dao.count(increment=True) == 2
    assert dao.count() == 2
