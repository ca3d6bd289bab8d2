"""
Exception hierarchy for bucketpull.

Services raise these; the CLI mode handlers catch :class:`BucketPullError`
and turn it into a non-zero exit code.
"""


class BucketPullError(Exception):
    """Base class for every failure surfaced by bucketpull."""


class ConfigError(BucketPullError):
    """config.json is unreadable or an update is invalid."""


class SessionError(BucketPullError):
    """A session or S3 client could not be created."""


class ListingError(BucketPullError):
    """A ``list_objects_v2`` page request failed."""

    def __init__(self, message, bucket=None, continuation_token=None):
        super().__init__(message)
        self.bucket = bucket
        self.continuation_token = continuation_token


class ObjectDownloadError(BucketPullError):
    """Fetching one object or writing it to disk failed."""

    def __init__(self, message, key=None, local_path=None):
        super().__init__(message)
        self.key = key
        self.local_path = local_path


class PropertiesError(BucketPullError):
    """Text could not be parsed as a properties document."""
