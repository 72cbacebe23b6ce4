"""Unit tests for RedisKeySchema.

Test coverage includes:

1. Key generation with and without a namespace prefix.
2. Prefix type validation.
"""

import pytest

from linkshortener.dao.redis import RedisKeySchema


@pytest.mark.parametrize(
    'prefix, expected_link_key, expected_index_key',
    [
        ('linkshortener:prod', 'linkshortener:prod:links:abc123', 'linkshortener:prod:links:index'),
        ('app', 'app:links:abc123', 'app:links:index'),
        (None, 'links:abc123', 'links:index'),
    ],
)
def test_keys(prefix, expected_link_key, expected_index_key):
    keys = RedisKeySchema(prefix=prefix)
    assert keys.link_key('abc123') == expected_link_key
    assert keys.index_key() == expected_index_key


@pytest.mark.parametrize('prefix', [123, ['app'], b'app'])
def test_invalid_prefix_type(prefix):
    with pytest.raises(TypeError, match='Prefix must be of type string'):
        RedisKeySchema(prefix=prefix)
