"""Unit tests for RedisKeySchema."""

import pytest

from tinifier.dao.redis import RedisKeySchema


def test_link_entry_key_with_prefix(app_prefix):
    assert RedisKeySchema(prefix=app_prefix).link_entry_key('abc123') == 'testapp:test:links:abc123:entry'


def test_link_entry_key_without_prefix():
    assert RedisKeySchema().link_entry_key('abc123') == 'links:abc123:entry'


@pytest.mark.parametrize('prefix', [1, 12.5, ['app']])
def test_invalid_prefix_type_raises_error(prefix):
    with pytest.raises(TypeError):
        RedisKeySchema(prefix=prefix)
