"""Tests for config.json handling."""
import json

import pytest

from bucketpull.errors import ConfigError
from bucketpull.utils.config_loader import (
    DEFAULT_CONFIG,
    ConfigLoader,
    get_client_timeouts,
    handle_config_update,
    mask_value,
    merge_cli_overrides,
)


def test_missing_config_is_created_with_defaults(isolated_config):
    config = ConfigLoader.load_config_json()

    assert isolated_config.exists()
    assert config == DEFAULT_CONFIG
    assert json.loads(isolated_config.read_text()) == DEFAULT_CONFIG


def test_partial_file_is_filled_from_defaults(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text(json.dumps({'region': 'eu-west-1'}))

    config = ConfigLoader.load_config_json()

    assert config['region'] == 'eu-west-1'
    assert config['clear_subdir'] == 'data'


def test_corrupt_file_raises(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text('{not json')

    with pytest.raises(ConfigError):
        ConfigLoader.load_config_json()


def test_non_object_file_raises(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text('[1, 2]')

    with pytest.raises(ConfigError):
        ConfigLoader.load_config_json()


def test_update_valid_keys(isolated_config, capsys):
    assert handle_config_update('{"region": "us-west-2", "bucket": "b1"}') == 0

    saved = json.loads(isolated_config.read_text())
    assert saved['region'] == 'us-west-2'
    assert saved['bucket'] == 'b1'
    assert 'Configuration updated successfully' in capsys.readouterr().out


def test_update_rejects_unknown_key(isolated_config):
    assert handle_config_update('{"nope": 1}') == 1
    assert 'nope' not in json.loads(isolated_config.read_text())


def test_update_rejects_bad_json(isolated_config):
    assert handle_config_update('{bad') == 1
    assert handle_config_update('[1]') == 1


def test_merge_cli_overrides_ignores_unset():
    merged = merge_cli_overrides({'region': 'a', 'bucket': 'b'}, region='c', bucket=None, profile='')

    assert merged == {'region': 'c', 'bucket': 'b'}


def test_mask_value():
    assert mask_value('secret_key', 'abcdefgh') == 'abcd...********'
    assert mask_value('region', 'eu-west-1') == 'eu-west-1'


def test_client_timeouts_defaults():
    assert get_client_timeouts(None) == {'connect_timeout': 60, 'read_timeout': 60}
    assert get_client_timeouts({'read_timeout': '7'})['read_timeout'] == 7
