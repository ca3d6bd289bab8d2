"""
Retrieval services for bucketpull.

Provides:
- s3/ - Session setup, single-file fetch and the directory sync walker
- properties_loader - Properties parsing on top of the single-file fetch
"""
from .s3 import S3Operations, S3SyncEngine, download_dir
from .properties_loader import parse_properties, get_properties, get_file_as_string

__all__ = [
    'S3Operations',
    'S3SyncEngine',
    'download_dir',
    'parse_properties',
    'get_properties',
    'get_file_as_string',
]
