"""
File system utilities
"""
import os
import shutil

from ..errors import ObjectDownloadError
from .logger import get_logger

log = get_logger(__name__)

# rwxrwxr-x, still subject to the process umask
DIR_MODE = 0o775


def ensure_dir(directory, mode=DIR_MODE):
    """
    Ensure directory exists, create if it doesn't.

    Args:
        directory: Directory path (empty string means the current directory)
        mode: Permission bits for newly created directories
    """
    if directory:
        os.makedirs(directory, mode=mode, exist_ok=True)


def clear_directory_contents(directory):
    """
    Remove everything inside *directory*, keeping the directory itself.

    Best effort: a failing entry is logged as a warning and skipped.

    Args:
        directory: Directory whose contents should be removed

    Returns:
        List of ``(path, error)`` tuples for entries that could not be removed
    """
    failures = []
    if not os.path.isdir(directory):
        return failures

    try:
        entries = os.listdir(directory)
    except OSError as e:
        log.warning("Could not list %s for clearing: %s", directory, e)
        return [(directory, e)]

    for entry in entries:
        path = os.path.join(directory, entry)
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.remove(path)
        except OSError as e:
            log.warning("Could not remove %s: %s", path, e)
            failures.append((path, e))

    return failures


def key_to_local_path(dest_local_dir, key, strip_prefix=None):
    """Map an object key onto a path under *dest_local_dir*.

    The key is used verbatim as the relative path. A leading ``/`` is
    dropped so the result always stays under the destination root.

    Args:
        dest_local_dir: Local destination root
        key: Object key
        strip_prefix: Optional prefix to remove from the key first

    Returns:
        Local file path

    Raises:
        ObjectDownloadError: if the key resolves outside the destination root

    Examples:
        >>> key_to_local_path('/tmp/out', 'a/b.txt')
        '/tmp/out/a/b.txt'
        >>> key_to_local_path('/tmp/out', 'a/b.txt', strip_prefix='a/')
        '/tmp/out/b.txt'
    """
    rel_path = key
    if strip_prefix and rel_path.startswith(strip_prefix):
        rel_path = rel_path[len(strip_prefix):]
    rel_path = rel_path.lstrip('/')

    local_path = os.path.join(dest_local_dir, *rel_path.split('/'))

    root = os.path.abspath(dest_local_dir)
    resolved = os.path.abspath(local_path)
    if not rel_path or os.path.commonpath([root, resolved]) != root or resolved == root:
        raise ObjectDownloadError(
            f"Key {key!r} does not map to a file under {dest_local_dir}",
            key=key,
            local_path=local_path,
        )

    return local_path


def read_text(filepath, encoding='utf-8'):
    """Read a whole file as text.

    Args:
        filepath: Path to the file
        encoding: Text encoding

    Returns:
        File contents
    """
    with open(filepath, 'r', encoding=encoding) as f:
        return f.read()
