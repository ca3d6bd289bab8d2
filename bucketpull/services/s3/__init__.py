"""
S3 retrieval service package.

- :mod:`operations`  — session, paged listing, object get, single-file fetch
- :mod:`sync_engine` — directory sync walker
"""
from .operations import S3Operations
from .sync_engine import S3SyncEngine, download_dir

__all__ = [
    'S3Operations',
    'S3SyncEngine',
    'download_dir',
]
