"""
Directory sync walker.

Provides :class:`S3SyncEngine`, which mirrors every object under a key
prefix into a local directory tree.
"""
import os

from ...errors import ListingError, ObjectDownloadError
from ...models.result import SyncResult
from ...utils.file_utils import clear_directory_contents, ensure_dir, key_to_local_path
from ...utils.logger import get_logger
from .operations import S3Operations

log = get_logger(__name__)

STATUS_DOWNLOADED = "Files downloaded"
DEFAULT_CLEAR_SUBDIR = "data"


class S3SyncEngine(S3Operations):
    """Downloads whole key prefixes from a bucket.

    Inherits the primitive S3 calls from :class:`S3Operations`.

    Args:
        region: AWS region
        bucket_name: S3 bucket name
        clear_subdir: Sub-directory of the destination emptied when
            ``clear_dest`` is requested
        **kwargs: Forwarded to :class:`S3Operations`
    """

    def __init__(self, region, bucket_name, clear_subdir=DEFAULT_CLEAR_SUBDIR, **kwargs):
        super().__init__(region, bucket_name, **kwargs)
        self.clear_subdir = clear_subdir

    # ── Destination handling ───────────────────────────────────────────

    def clear_destination(self, dest_local_dir):
        """Empty the data subtree of *dest_local_dir*.

        Failures are logged as warnings and never abort the walk.

        Returns:
            List of ``(path, error)`` tuples that could not be removed
        """
        target = os.path.join(dest_local_dir, self.clear_subdir) if self.clear_subdir else dest_local_dir
        log.debug("Clearing %s", target)
        failures = clear_directory_contents(target)
        if failures:
            log.warning("%d path(s) under %s could not be removed; stale files may remain",
                        len(failures), target)
        return failures

    # ── Per-page processing ────────────────────────────────────────────

    def _download_page(self, page, result, source_prefix, strip_prefix, continue_on_error):
        for obj in page.get('Contents', []):
            s3_key = obj['Key']

            if source_prefix and not s3_key.startswith(source_prefix):
                result.skipped.append(s3_key)
                continue

            # Directory marker
            if s3_key.endswith('/'):
                log.debug("Directory Found: %s", s3_key)
                result.skipped.append(s3_key)
                continue

            try:
                local_path = key_to_local_path(
                    result.dest_local_dir,
                    s3_key,
                    strip_prefix=source_prefix if strip_prefix else None,
                )
                try:
                    ensure_dir(os.path.dirname(local_path))
                except OSError as e:
                    raise ObjectDownloadError(
                        f"Error creating directory for {s3_key}: {e}", key=s3_key, local_path=local_path
                    ) from e
                size = self.stream_object_to_file(s3_key, local_path)
            except ObjectDownloadError as e:
                if not continue_on_error:
                    raise
                log.error("%s", e)
                result.errors.append((s3_key, e))
                continue

            result.record_download(local_path, size)
            log.info("File %s of size %d bytes downloaded", local_path, size)

    # ── Main entry point ───────────────────────────────────────────────

    def download_dir(self, dest_local_dir, source_prefix="", clear_dest=False,
                     continue_on_error=False, strip_prefix=False):
        """Download every object whose key starts with *source_prefix*.

        The full key is mirrored under *dest_local_dir* (the prefix is kept
        unless *strip_prefix* is set). Directory markers and non-matching
        keys are neither written nor counted. Pages are requested until the
        store reports the listing is no longer truncated.

        Args:
            dest_local_dir: Local destination root (created if absent)
            source_prefix: Key prefix filter, ``""`` for the whole bucket
            clear_dest: Empty the destination's data subtree first
            continue_on_error: Record per-object failures and keep going
                instead of aborting on the first one
            strip_prefix: Drop *source_prefix* from the local paths

        Returns:
            SyncResult

        Raises:
            SessionError: if no usable credentials could be resolved
            ListingError: if a page request fails, or a truncated page
                carries no continuation token
            ObjectDownloadError: on the first object failure, unless
                *continue_on_error* is set
        """
        source_prefix = source_prefix or ""
        result = SyncResult(
            bucket=self.bucket_name,
            dest_local_dir=dest_local_dir,
            source_prefix=source_prefix,
        )

        if clear_dest:
            self.clear_destination(dest_local_dir)
        ensure_dir(dest_local_dir)

        continuation_token = None
        truncated = True
        while truncated:
            page = self.list_objects_page(continuation_token)
            result.pages_listed += 1
            self._download_page(page, result, source_prefix, strip_prefix, continue_on_error)
            continuation_token = page.get('NextContinuationToken')
            truncated = bool(page.get('IsTruncated', False))
            if truncated and continuation_token is None:
                raise ListingError(
                    f"Listing of bucket {self.bucket_name} is truncated but returned no continuation token",
                    bucket=self.bucket_name,
                )

        result.status = STATUS_DOWNLOADED
        log.info("Total %d files downloaded from s3 bucket", result.files_downloaded)
        if result.errors:
            log.warning("%d object(s) failed to download", len(result.errors))

        return result


def download_dir(region, bucket, dest_local_dir, source_prefix="", clear_dest=False, **kwargs):
    """Open a session against *region* and run one directory sync walk.

    Keyword arguments are split between :class:`S3SyncEngine` (session and
    client options) and :meth:`S3SyncEngine.download_dir` (walk options).

    Returns:
        SyncResult
    """
    walk_options = {
        name: kwargs.pop(name)
        for name in ('continue_on_error', 'strip_prefix')
        if name in kwargs
    }
    engine = S3SyncEngine(region, bucket, **kwargs)
    return engine.download_dir(dest_local_dir, source_prefix, clear_dest, **walk_options)
