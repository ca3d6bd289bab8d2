"""Shared fixtures: an in-memory stand-in for the boto3 S3 client."""
import io
import logging
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError


def make_page(keys, next_token=None):
    """Build a ``list_objects_v2`` response holding *keys*."""
    page = {
        'Contents': [{'Key': key, 'Size': 0} for key in keys],
        'KeyCount': len(keys),
        'IsTruncated': next_token is not None,
    }
    if next_token is not None:
        page['NextContinuationToken'] = next_token
    return page


def client_error(operation='GetObject', code='AccessDenied'):
    return ClientError({'Error': {'Code': code, 'Message': 'simulated failure'}}, operation)


class FakeBucket:
    """Object contents plus the listing pages the fake client returns."""

    def __init__(self, objects, pages=None):
        self.objects = dict(objects)
        self.pages = pages if pages is not None else [make_page(list(self.objects))]
        self.failing_keys = set()

    def client(self):
        client = MagicMock(name='s3_client')
        client.list_objects_v2.side_effect = list(self.pages)
        client.get_object.side_effect = self._get_object
        client.download_file.side_effect = self._download_file
        return client

    def _get_object(self, Bucket, Key):
        if Key in self.failing_keys or Key not in self.objects:
            raise client_error('GetObject', 'NoSuchKey')
        return {'Body': io.BytesIO(self.objects[Key]), 'ContentLength': len(self.objects[Key])}

    def _download_file(self, bucket, key, filename):
        if key in self.failing_keys or key not in self.objects:
            raise client_error('HeadObject', '404')
        with open(filename, 'wb') as f:
            f.write(self.objects[key])


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point config.json at a temporary file."""
    config_path = tmp_path / 'cfg' / 'config.json'
    monkeypatch.setenv('BUCKETPULL_CONFIG', str(config_path))
    return config_path


@pytest.fixture
def info_logs(caplog):
    caplog.set_level(logging.DEBUG, logger='bucketpull')
    return caplog
