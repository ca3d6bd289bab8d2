"""Tests for the command-line entry point."""
import json
from unittest.mock import MagicMock, patch

import pytest

from bucketpull.cli import create_argument_parser, main

from conftest import FakeBucket, client_error, make_page


@pytest.fixture
def fake_session():
    """Patch session creation; yields a setter for the bucket to serve."""
    session = MagicMock(name='session')

    def use(bucket):
        session.client.return_value = bucket.client()
        return session

    with patch('bucketpull.services.s3.operations.create_boto3_session', return_value=session):
        yield use


BASE = ['--region', 'us-east-1', '--bucket', 'test-bucket']


def test_parser_subcommands():
    args = create_argument_parser().parse_args(
        ['sync', 'out', '--prefix', 'a/', '--clear', '--continue-on-error'])

    assert args.command == 'sync'
    assert args.dest == 'out'
    assert args.prefix == 'a/'
    assert args.clear is True
    assert args.continue_on_error is True
    assert args.strip_prefix is False


def test_no_command_prints_help(isolated_config, capsys):
    assert main([]) == 1
    assert 'usage' in capsys.readouterr().out


def test_missing_bucket_fails(isolated_config):
    assert main(['--region', 'us-east-1', 'sync', 'out']) == 1


def test_config_update(isolated_config):
    assert main(['--config', '{"bucket": "from-config"}']) == 0
    assert json.loads(isolated_config.read_text())['bucket'] == 'from-config'


def test_sync_command(isolated_config, fake_session, tmp_path, capsys):
    fake_session(FakeBucket({'a/b.txt': b'b', 'a/': b'', 'c.txt': b'c'}))
    dest = tmp_path / 'dest'

    assert main(BASE + ['sync', str(dest), '--prefix', 'a/']) == 0

    assert (dest / 'a' / 'b.txt').read_bytes() == b'b'
    assert not (dest / 'c.txt').exists()
    assert '1 file(s)' in capsys.readouterr().out


def test_sync_uses_config_values(isolated_config, fake_session, tmp_path):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text(json.dumps({'region': 'eu-west-1', 'bucket': 'cfg-bucket'}))
    session = fake_session(FakeBucket({'x.txt': b'x'}))

    assert main(['sync', str(tmp_path / 'dest')]) == 0

    session.client.return_value.list_objects_v2.assert_called_once_with(Bucket='cfg-bucket')


def test_sync_listing_failure_exits_nonzero(isolated_config, fake_session, tmp_path):
    fake_session(FakeBucket({}, pages=[client_error('ListObjectsV2', 'NoSuchBucket')]))

    assert main(BASE + ['sync', str(tmp_path / 'dest')]) == 1


def test_sync_partial_failure_with_continue_exits_nonzero(isolated_config, fake_session, tmp_path):
    bucket = FakeBucket({'a.txt': b'a', 'b.txt': b'b'})
    bucket.failing_keys.add('a.txt')
    fake_session(bucket)

    assert main(BASE + ['sync', str(tmp_path / 'dest'), '--continue-on-error']) == 1
    assert (tmp_path / 'dest' / 'b.txt').exists()


def test_get_command_prints_content(isolated_config, fake_session, tmp_path, capsys):
    fake_session(FakeBucket({'k.txt': b'hello\n'}))
    out = tmp_path / 'k.txt'

    assert main(BASE + ['get', 'k.txt', '--output', str(out), '--print']) == 0

    assert out.read_text() == 'hello\n'
    assert capsys.readouterr().out == 'hello\n'


def test_get_command_no_keep(isolated_config, fake_session, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    fake_session(FakeBucket({'k.txt': b'hello'}))

    assert main(BASE + ['get', 'k.txt', '--no-keep']) == 0
    assert not (tmp_path / 'k.txt').exists()


def test_props_command_json(isolated_config, fake_session, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    fake_session(FakeBucket({'app.properties': b'# c\nb=2\na = 1\n'}))

    assert main(BASE + ['props', 'app.properties', '--format', 'json']) == 0

    assert json.loads(capsys.readouterr().out) == {'a': '1', 'b': '2'}


def test_props_command_missing_object(isolated_config, fake_session, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    fake_session(FakeBucket({}))

    assert main(BASE + ['props', 'missing.properties']) == 1


def test_paginated_sync_through_cli(isolated_config, fake_session, tmp_path):
    session = fake_session(FakeBucket(
        {'p/1.txt': b'1', 'p/2.txt': b'2'},
        pages=[make_page(['p/1.txt'], next_token='t'), make_page(['p/2.txt'])],
    ))

    assert main(BASE + ['sync', str(tmp_path / 'd'), '--prefix', 'p/']) == 0
    assert session.client.return_value.list_objects_v2.call_count == 2
