"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env(), app_name(), app_prefix() correctly read environment variables.

2. Defaults
   - Ensures merge_defaults() fills missing keys and rejects unknown backends.

3. Local configuration
   - Ensures load_config() reads overrides from environment variables when running locally.

4. AppConfig loading
   - Ensures load_config() returns parsed AppConfig data merged over defaults.
   - Ensures missing AppConfig identifiers raise MissingEnvironmentVariableError.
   - Ensures load_config() propagates ClientError when AppConfig calls fail.
"""

import os
import json
from io import BytesIO
from unittest.mock import MagicMock

import pytest
import botocore

from linkshortener.utils import config
from linkshortener.exceptions import BadConfigurationError, MissingEnvironmentVariableError


LOCAL_VARS = ('BASE_URL', 'ACTIVE_BACKEND', 'REDIS_HOST', 'REDIS_PORT', 'REDIS_DB', 'AWS_SAM_LOCAL')


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Remove configuration variables inherited from the host environment."""
    for name in LOCAL_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def deployed_env(monkeypatch):
    """Pretend to run in a deployed environment with AppConfig identifiers set."""
    monkeypatch.setenv('APP_ENV', 'dev')
    monkeypatch.setenv('APPCONFIG_APP_ID', 'app123')
    monkeypatch.setenv('APPCONFIG_ENV_ID', 'env123')
    monkeypatch.setenv('APPCONFIG_PROFILE_ID', 'prof123')


@pytest.fixture
def appconfig_payload():
    # fmt: off
    return {
        'build': 42,
        'active_backend': 'redis',
        'base_url': 'https://sho.rt',
        'redis': {
            'host': 'monkey',
            'port': 6380,
        },
    }
    # fmt: on


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env(monkeypatch):
    """Ensure app_env() returns the lowercased value of APP_ENV"""
    monkeypatch.setitem(os.environ, 'APP_ENV', 'TEST')
    assert config.app_env() == 'test'


def test_app_env_defaults_to_local(monkeypatch):
    monkeypatch.delitem(os.environ, 'APP_ENV', raising=False)
    assert config.app_env() == 'local'


def test_app_name_not_set(monkeypatch):
    """Ensure app_name() returns None when APP_NAME is not set"""
    monkeypatch.delitem(os.environ, 'APP_NAME', raising=False)
    assert config.app_name() is None
    assert config.app_prefix() is None


def test_app_prefix(monkeypatch):
    monkeypatch.setitem(os.environ, 'APP_NAME', 'test-app')
    monkeypatch.setitem(os.environ, 'APP_ENV', 'test')
    assert config.app_prefix() == 'test-app:test'


# -------------------------------
# 2. Defaults
# -------------------------------


def test_merge_defaults_fills_missing_keys():
    result = config.merge_defaults({'redis': {'host': 'redis.internal'}})

    assert result['active_backend'] == 'memory'
    assert result['base_url'] == 'http://localhost:3000'
    assert result['default_duration_minutes'] == 30
    assert result['shortcode_length'] == 6
    assert result['redis'] == {'host': 'redis.internal', 'port': 6379, 'db': 0}


def test_merge_defaults_does_not_alias_input():
    document = {'extra': {'nested': [1]}}
    result = config.merge_defaults(document)
    result['extra']['nested'].append(2)
    assert document == {'extra': {'nested': [1]}}


def test_merge_defaults_rejects_unknown_backend():
    with pytest.raises(BadConfigurationError, match="Unsupported backend 'dynamo'"):
        config.merge_defaults({'active_backend': 'dynamo'})


# -------------------------------
# 3. Local configuration
# -------------------------------


def test_load_config_locally_uses_defaults(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'local')
    monkeypatch.setattr(config.boto3, 'client', MagicMock(side_effect=AssertionError('AppConfig must not be used locally')))

    assert config.load_config() == config.default_config()


def test_load_config_locally_reads_environment(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'local')
    monkeypatch.setenv('BASE_URL', 'https://sho.rt')
    monkeypatch.setenv('ACTIVE_BACKEND', 'REDIS')
    monkeypatch.setenv('REDIS_HOST', 'redis.local')
    monkeypatch.setenv('REDIS_PORT', '6380')
    monkeypatch.setenv('REDIS_DB', '2')

    result = config.load_config()

    assert result['base_url'] == 'https://sho.rt'
    assert result['active_backend'] == 'redis'
    assert result['redis'] == {'host': 'redis.local', 'port': 6380, 'db': 2}


def test_load_config_locally_rejects_non_integer_port(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'local')
    monkeypatch.setenv('REDIS_PORT', 'sixty')

    with pytest.raises(BadConfigurationError):
        config.load_config()


def test_load_config_under_sam_local(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'dev')
    monkeypatch.setenv('AWS_SAM_LOCAL', 'true')
    monkeypatch.setenv('BASE_URL', 'http://127.0.0.1:3000')

    assert config.load_config()['base_url'] == 'http://127.0.0.1:3000'


# -------------------------------
# 4. AppConfig loading
# -------------------------------


def test_load_config_from_appconfig(monkeypatch, deployed_env, appconfig_payload):
    """Ensure load_config() fetches the document from AppConfig and merges defaults."""
    monkey_bytes = BytesIO(json.dumps(appconfig_payload).encode('utf-8'))
    mock_appconfig = MagicMock()
    mock_appconfig.start_configuration_session.return_value = {'InitialConfigurationToken': 'monkey_token'}
    mock_appconfig.get_latest_configuration.return_value = {'Configuration': monkey_bytes}
    monkeypatch.setattr(config.boto3, 'client', lambda service: mock_appconfig)

    result = config.load_config()

    assert result['active_backend'] == 'redis'
    assert result['base_url'] == 'https://sho.rt'
    assert result['redis'] == {'host': 'monkey', 'port': 6380, 'db': 0}
    assert result['default_duration_minutes'] == 30

    mock_appconfig.start_configuration_session.assert_called_once_with(
        ApplicationIdentifier='app123',
        EnvironmentIdentifier='env123',
        ConfigurationProfileIdentifier='prof123',
    )
    mock_appconfig.get_latest_configuration.assert_called_once_with(
        ConfigurationToken='monkey_token',
    )


def test_load_config_requires_appconfig_identifiers(monkeypatch, deployed_env):
    monkeypatch.delenv('APPCONFIG_PROFILE_ID')
    monkeypatch.setattr(config.boto3, 'client', MagicMock(side_effect=AssertionError('AppConfig must not be called')))

    with pytest.raises(MissingEnvironmentVariableError, match="'APPCONFIG_PROFILE_ID'"):
        config.load_config()


def test_load_config_propagates_client_error(monkeypatch, deployed_env):
    """Ensure load_config() propagates ClientError when AppConfig returns an error."""
    mock_appconfig = MagicMock()
    mock_appconfig.start_configuration_session.side_effect = botocore.exceptions.ClientError(
        {'Error': {'Code': 'ResourceNotFoundException'}}, 'StartConfigurationSession'
    )
    monkeypatch.setattr(config.boto3, 'client', lambda service: mock_appconfig)

    with pytest.raises(botocore.exceptions.ClientError):
        config.load_config()
