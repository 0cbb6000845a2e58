"""Unit tests for the operation layer in operations.py.

Test coverage includes:

1. add_url()
   - Adds an entry with a non-empty short code over the alphabet.
   - Adding the same URL twice raises ShortCodeCollisionError.
   - An empty short code (hash 0) raises ValueError.
   - Entries written to a file survive a reload, whatever the author.

2. add_entry()
   - Recomputes the short code and creation date, keeps author and expiration.

3. edit_entry()
   - Merges by default, associates with reassign_author.
   - Edits are persisted, including across file DAO instances.
   - Failed writes restore the previous entry.
   - Updates that can't be persisted leave the stored entry untouched.

4. get_url() / remove_url()

5. create_store()
   - Builds the configured backend.
"""

from datetime import datetime, UTC
from unittest.mock import MagicMock, patch

import pytest
from freezegun import freeze_time

from tinifier import operations
from tinifier.exceptions import BadConfigurationError, ShortCodeCollisionError
from tinifier.models import UrlEntry, UrlEntryRequest
from tinifier.dao import UrlEntryMemoryDAO, UrlEntryFileDAO
from tinifier.dao.exceptions import DataStoreError, UrlEntryAlreadyExistsError
from tinifier.operations import add_url, add_entry, edit_entry, get_url, remove_url, create_store
from tinifier.utils import ALPHABET, generate_shortcode


@pytest.fixture
def store() -> UrlEntryMemoryDAO:
    return UrlEntryMemoryDAO()


# -------------------------------
# 1. add_url()
# -------------------------------


def test_add_url_on_empty_store(store):
    entry = add_url('https://example.com', store, author='alice')

    assert entry.long_url == 'https://example.com'
    assert entry.short_url
    assert all(character in ALPHABET for character in entry.short_url)
    assert entry.short_url == generate_shortcode('https://example.com')
    assert entry.author == 'alice'
    assert entry.expiration_date is None
    assert store.get(entry.short_url) == entry


def test_add_url_does_not_validate_url(store):
    entry = add_url('https://example.com/with?query=1', store)
    assert not entry.has_valid_url()
    assert store.contains_key(entry.short_url)


def test_add_same_url_twice_raises_collision(store):
    first = add_url('https://example.com', store, author='alice')

    with pytest.raises(ShortCodeCollisionError) as exc_info:
        add_url('https://example.com', store, author='bob')

    assert exc_info.value.short_url == first.short_url
    assert exc_info.value.long_url == 'https://example.com'
    assert exc_info.value.existing == first
    assert store.count() == 1
    assert store.get(first.short_url).author == 'alice'


def test_add_url_with_empty_short_code_raises_error(store, monkeypatch):
    monkeypatch.setattr(operations, 'generate_shortcode', lambda long_url: '')
    with pytest.raises(ValueError, match='hashes to 0'):
        add_url('https://example.com', store)
    assert store.count() == 0


def test_add_url_propagates_data_store_error():
    store = MagicMock(spec=UrlEntryMemoryDAO)
    store.contains_key.return_value = False
    store.insert.side_effect = DataStoreError('disk full')

    with pytest.raises(DataStoreError):
        add_url('https://example.com', store)


@pytest.mark.parametrize('author', ['mary-jane', 'j.smith', 'Jane Doe'])
def test_add_url_with_punctuated_author_survives_reload(tmp_path, author):
    path = tmp_path / 'tinifier'
    entry = add_url('https://example.com', UrlEntryFileDAO(path), author=author)

    reloaded = UrlEntryFileDAO(path)
    assert reloaded.skipped_lines == []
    assert reloaded.get(entry.short_url).author == author


def test_add_url_with_empty_url_to_file_raises_error(tmp_path):
    path = tmp_path / 'tinifier'
    store = UrlEntryFileDAO(path)

    with pytest.raises(ValueError, match='empty long URL'):
        add_url('', store)

    assert store.count() == 0
    assert not path.exists()


# -------------------------------
# 2. add_entry()
# -------------------------------


@freeze_time('2026-10-17 09:30:00')
def test_add_entry_recomputes_short_code_and_creation_date(store):
    expires = datetime(2027, 1, 1, tzinfo=UTC)
    entry = UrlEntry(
        long_url='https://example.com',
        short_url='ignored',
        expiration_date=expires,
        creation_date=datetime(2020, 1, 1, tzinfo=UTC),
        author='alice',
    )

    added = add_entry(entry, store)

    assert added.short_url == generate_shortcode('https://example.com')
    assert added.creation_date == datetime(2026, 10, 17, 9, 30, 0, tzinfo=UTC)
    assert added.expiration_date == expires
    assert added.author == 'alice'
    assert not store.contains_key('ignored')
    assert store.get(added.short_url) == added


def test_add_entry_on_taken_short_code_raises_error(store):
    add_url('https://example.com', store)
    with pytest.raises(UrlEntryAlreadyExistsError):
        add_entry(UrlEntry.create('https://example.com', 'whatever'), store)


# -------------------------------
# 3. edit_entry()
# -------------------------------


def test_edit_missing_entry_returns_none(store):
    assert edit_entry('missing', UrlEntryRequest(author='bob', long_url='https://example.org'), store) is None


def test_edit_merges_and_persists(store):
    original = add_url('https://example.com', store, author='alice')
    request = UrlEntryRequest(author='bob', long_url='https://example.org')

    edited = edit_entry(original.short_url, request, store)

    assert edited.long_url == 'https://example.org'
    assert edited.short_url == original.short_url
    assert edited.creation_date == original.creation_date
    assert edited.author == 'alice'
    assert store.get(original.short_url) == edited


def test_edit_with_reassign_author(store):
    original = add_url('https://example.com', store, author='alice')

    edited = edit_entry(original.short_url, UrlEntryRequest(author='bob'), store, reassign_author=True)

    assert edited.author == 'bob'
    assert edited.long_url == original.long_url
    assert store.get(original.short_url).author == 'bob'


def test_edit_without_changes_does_not_write():
    entry = UrlEntry.create('https://example.com', 'abc', author='alice')
    store = MagicMock(spec=UrlEntryMemoryDAO)
    store.get.return_value = entry

    assert edit_entry('abc', UrlEntryRequest(author='bob'), store) is entry
    store.remove.assert_not_called()
    store.insert.assert_not_called()


def test_edit_persists_to_file(tmp_path):
    path = tmp_path / 'tinifier'
    original = add_url('https://example.com', UrlEntryFileDAO(path), author='alice')

    edit_entry(original.short_url, UrlEntryRequest(author='bob', long_url='https://example.org'), UrlEntryFileDAO(path))

    reloaded = UrlEntryFileDAO(path)
    assert reloaded.count() == 1
    assert reloaded.get(original.short_url).long_url == 'https://example.org'
    assert reloaded.get(original.short_url).author == 'alice'


def test_edit_restores_previous_entry_on_write_failure(store):
    original = add_url('https://example.com', store, author='alice')
    real_insert = store.insert
    calls = []

    def failing_insert(short_url, entry, **kwargs):
        calls.append(entry)
        if len(calls) == 1:
            raise DataStoreError('disk full')
        return real_insert(short_url, entry)

    with patch.object(store, 'insert', side_effect=failing_insert):
        with pytest.raises(DataStoreError):
            edit_entry(original.short_url, UrlEntryRequest(author='bob', long_url='https://example.org'), store)

    assert store.get(original.short_url) == original


def test_edit_restores_previous_entry_on_any_insert_error(store):
    original = add_url('https://example.com', store, author='alice')
    real_insert = store.insert

    def failing_insert(short_url, entry, **kwargs):
        if entry != original:
            raise ValueError('unexpected')
        return real_insert(short_url, entry)

    with patch.object(store, 'insert', side_effect=failing_insert):
        with pytest.raises(ValueError, match='unexpected'):
            edit_entry(original.short_url, UrlEntryRequest(author='bob', long_url='https://example.org'), store)

    assert store.get(original.short_url) == original


def test_edit_with_unpersistable_url_keeps_entry_in_file(tmp_path):
    path = tmp_path / 'tinifier'
    store = UrlEntryFileDAO(path)
    original = add_url('https://example.com', store, author='alice')
    content = path.read_text(encoding='utf-8')

    with pytest.raises(ValueError, match='line break'):
        edit_entry(original.short_url, UrlEntryRequest(author='bob', long_url='https://example.org\nx'), store)

    assert store.get(original.short_url) == original
    assert path.read_text(encoding='utf-8') == content
    assert UrlEntryFileDAO(path).get(original.short_url).long_url == 'https://example.com'


# -------------------------------
# 4. get_url() / remove_url()
# -------------------------------


def test_get_url(store):
    entry = add_url('https://example.com', store)
    assert get_url(entry.short_url, store) == entry
    assert get_url('missing', store) is None


def test_remove_url(store):
    entry = add_url('https://example.com', store)
    assert remove_url(entry.short_url, store) == entry
    assert get_url(entry.short_url, store) is None
    assert remove_url(entry.short_url, store) is None


# -------------------------------
# 5. create_store()
# -------------------------------


def test_create_memory_store():
    assert isinstance(create_store({'memory': {}}), UrlEntryMemoryDAO)


def test_create_file_store(tmp_path):
    store = create_store({'file': {'path': str(tmp_path / 'entries')}})
    assert isinstance(store, UrlEntryFileDAO)
    assert store.path == tmp_path / 'entries'


def test_create_redis_store(monkeypatch):
    monkeypatch.setenv('APP_NAME', 'tinifier')
    monkeypatch.setenv('APP_ENV', 'test')

    with patch('tinifier.dao.redis.UrlEntryRedisDAO') as dao_mock:
        store = create_store({'redis': {'host': 'redis.test', 'port': 6380, 'db': 1}})

    dao_mock.assert_called_once_with(redis_host='redis.test', redis_port=6380, redis_db=1, prefix='tinifier:test')
    assert store is dao_mock.return_value


@pytest.mark.parametrize('config', [{}, {'memory': {}, 'file': {}}, {'sqlite': {}}])
def test_create_store_with_bad_config_raises_error(config):
    with pytest.raises(BadConfigurationError):
        create_store(config)
