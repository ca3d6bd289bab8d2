"""
Low-level S3 primitive operations.

Provides the base class for all S3 interactions: session setup, paged
listing, object streaming and the single-file fetch.
"""
import os
import tempfile
from typing import Optional

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    PartialCredentialsError,
)

from ...errors import ListingError, ObjectDownloadError, SessionError
from ...models.result import FetchResult
from ...utils.aws_utils import create_boto3_session, create_s3_client
from ...utils.file_utils import ensure_dir, read_text
from ...utils.logger import get_logger

log = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024

# Raised lazily on the first request, not when the session is created
CREDENTIAL_ERRORS = (NoCredentialsError, PartialCredentialsError)


class S3Operations:
    """Base class providing primitive S3 operations.

    The session is opened eagerly; a failure raises
    :class:`~bucketpull.errors.SessionError` from the constructor.

    Args:
        region: AWS region
        bucket_name: S3 bucket name
        profile_name: Optional AWS CLI profile name
        s3_client: Pre-built client (skips session creation)
        connect_timeout: Client connect timeout in seconds
        read_timeout: Client read timeout in seconds
    """

    def __init__(self, region, bucket_name, profile_name=None, s3_client=None,
                 connect_timeout=60, read_timeout=60):
        self.region = region
        self.bucket_name = bucket_name
        self.profile_name = profile_name
        self.session = None

        if s3_client is None:
            self.session = create_boto3_session(region, profile_name)
            s3_client = create_s3_client(
                self.session,
                connect_timeout=connect_timeout,
                read_timeout=read_timeout,
            )
        self.s3_client = s3_client

    def _credentials_error(self, e):
        return SessionError(f"Unable to authenticate against AWS: {e}")

    def list_objects_page(self, continuation_token: Optional[str] = None):
        """Request one ``list_objects_v2`` page for the whole bucket.

        Args:
            continuation_token: Token from the previous page, passed on
                verbatim; ``None`` requests the first page

        Returns:
            Raw response dictionary

        Raises:
            SessionError: if no usable credentials could be resolved
            ListingError: if the call fails
        """
        params = {'Bucket': self.bucket_name}
        if continuation_token is not None:
            params['ContinuationToken'] = continuation_token

        try:
            return self.s3_client.list_objects_v2(**params)
        except CREDENTIAL_ERRORS as e:
            raise self._credentials_error(e) from e
        except (BotoCoreError, ClientError) as e:
            raise ListingError(
                f"Error listing bucket {self.bucket_name}: {e}",
                bucket=self.bucket_name,
                continuation_token=continuation_token,
            ) from e

    def stream_object_to_file(self, s3_key, local_path):
        """Stream one object's body into *local_path*, overwriting it.

        The body goes to a temporary file beside *local_path* which only
        replaces it once fully written, so a failed transfer leaves any
        previous copy untouched.

        Args:
            s3_key: S3 object key
            local_path: Local file path (parent must exist)

        Returns:
            Number of bytes written

        Raises:
            SessionError: if no usable credentials could be resolved
            ObjectDownloadError: if the get or the write fails
        """
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=s3_key)
        except CREDENTIAL_ERRORS as e:
            raise self._credentials_error(e) from e
        except (BotoCoreError, ClientError) as e:
            raise ObjectDownloadError(
                f"Error fetching {s3_key}: {e}", key=s3_key, local_path=local_path
            ) from e

        body = response['Body']
        written = 0
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=os.path.dirname(local_path) or '.',
                prefix='.' + os.path.basename(local_path) + '.',
                suffix='.part',
                delete=False,
            ) as f:
                tmp_path = f.name
                while True:
                    chunk = body.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
                    written += len(chunk)
            os.replace(tmp_path, local_path)
        except (OSError, BotoCoreError) as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise ObjectDownloadError(
                f"Error writing {s3_key} to {local_path}: {e}", key=s3_key, local_path=local_path
            ) from e
        finally:
            close = getattr(body, 'close', None)
            if close is not None:
                close()

        return written

    def read_object(self, s3_key):
        """Read one object fully into memory.

        Returns:
            Object content as bytes

        Raises:
            SessionError: if no usable credentials could be resolved
            ObjectDownloadError: if the get or the read fails
        """
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=s3_key)
            return response['Body'].read()
        except CREDENTIAL_ERRORS as e:
            raise self._credentials_error(e) from e
        except (BotoCoreError, ClientError) as e:
            raise ObjectDownloadError(f"Error fetching {s3_key}: {e}", key=s3_key) from e

    def download_file(self, s3_key, local_path):
        """Download file from S3.

        Args:
            s3_key: S3 object key
            local_path: Local file path, created or truncated

        Returns:
            Number of bytes on disk after the download

        Raises:
            SessionError: if no usable credentials could be resolved
            ObjectDownloadError: if the local file cannot be created or the
                download fails
        """
        try:
            ensure_dir(os.path.dirname(local_path))
            self.s3_client.download_file(self.bucket_name, s3_key, local_path)
            return os.path.getsize(local_path)
        except CREDENTIAL_ERRORS as e:
            raise self._credentials_error(e) from e
        except (BotoCoreError, ClientError, OSError) as e:
            raise ObjectDownloadError(
                f"Error while downloading file {s3_key!r}: {e}", key=s3_key, local_path=local_path
            ) from e

    def fetch_file(self, s3_key, local_path=None, keep_local_copy=True, encoding='utf-8'):
        """Download one object and return its content as text.

        With *keep_local_copy* the object is written to *local_path*
        (default: the key, relative to the working directory) and read
        back from disk. Otherwise it is read straight into memory and no
        file is created.

        Args:
            s3_key: S3 object key (non-empty)
            local_path: Where to write the file
            keep_local_copy: Materialize the object on disk first
            encoding: Text encoding of the object

        Returns:
            FetchResult

        Raises:
            ValueError: if *s3_key* is empty
            ObjectDownloadError: on any download, write or read failure
        """
        if not s3_key:
            raise ValueError("s3_key must be a non-empty string")

        if not keep_local_copy:
            data = self.read_object(s3_key)
            try:
                content = data.decode(encoding)
            except UnicodeDecodeError as e:
                raise ObjectDownloadError(f"Error decoding {s3_key}: {e}", key=s3_key) from e
            log.info("Got %s %d bytes", s3_key, len(data))
            return FetchResult(key=s3_key, content=content, size=len(data))

        local_path = local_path or s3_key
        size = self.download_file(s3_key, local_path)
        log.info("Got %s %d bytes", local_path, size)

        try:
            content = read_text(local_path, encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ObjectDownloadError(
                f"Error while reading the file {local_path}: {e}", key=s3_key, local_path=local_path
            ) from e

        return FetchResult(key=s3_key, content=content, size=size, local_path=local_path)

    def fetch_text(self, s3_key, **kwargs):
        """Shortcut for ``fetch_file(...).content``."""
        return self.fetch_file(s3_key, **kwargs).content
