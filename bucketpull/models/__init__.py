"""
Data models for bucketpull
"""

from .result import FetchResult, SyncResult

__all__ = ['FetchResult', 'SyncResult']
