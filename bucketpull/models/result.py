"""
Result value objects returned by the fetch and sync services.
"""
from dataclasses import dataclass, field
from typing import Optional, List, Tuple


@dataclass
class FetchResult:
    """Outcome of a single-file fetch.

    ``local_path`` is ``None`` when the object was read straight into
    memory without materializing a file.
    """

    key: str
    content: str
    size: int = 0
    local_path: Optional[str] = None

    def to_dict(self):
        """Serialize to dictionary (content omitted)"""
        return {
            "key": self.key,
            "size": self.size,
            "local_path": self.local_path,
        }


@dataclass
class SyncResult:
    """Outcome of one directory sync walk.

    Owned by a single invocation; nothing here outlives the call that
    produced it.
    """

    bucket: str
    dest_local_dir: str
    source_prefix: str = ""
    status: str = ""
    files_downloaded: int = 0
    bytes_downloaded: int = 0
    pages_listed: int = 0
    downloaded: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    errors: List[Tuple[str, Exception]] = field(default_factory=list)

    @property
    def success(self):
        return not self.errors

    def record_download(self, local_path, size):
        self.downloaded.append(local_path)
        self.files_downloaded += 1
        self.bytes_downloaded += size

    def to_dict(self):
        """Serialize to dictionary"""
        return {
            "bucket": self.bucket,
            "dest_local_dir": self.dest_local_dir,
            "source_prefix": self.source_prefix,
            "status": self.status,
            "success": self.success,
            "files_downloaded": self.files_downloaded,
            "bytes_downloaded": self.bytes_downloaded,
            "pages_listed": self.pages_listed,
            "downloaded": list(self.downloaded),
            "skipped": list(self.skipped),
            "errors": [{"key": key, "error": str(exc)} for key, exc in self.errors],
        }
