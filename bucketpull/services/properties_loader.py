"""
Properties document loading.

Parses ``key=value`` text with *jproperties* and combines it with the
single-file fetch so a configuration document can be pulled from a bucket
in one call.
"""
from typing import Dict

from jproperties import Properties, PropertyError

from ..errors import PropertiesError
from .s3.operations import S3Operations


def parse_properties(text: str) -> Dict[str, str]:
    """Parse a properties document into a plain dictionary.

    Args:
        text: Full document text

    Returns:
        Mapping of keys to values

    Raises:
        PropertiesError: if the parser rejects the text

    Example:
        >>> parse_properties("# comment\\nname = demo\\nport=8080\\n")
        {'name': 'demo', 'port': '8080'}
    """
    props = Properties()
    try:
        props.load(text)
    except PropertyError as e:
        raise PropertiesError(f"Malformed properties document: {e}") from e
    return dict(props.properties)


def get_file_as_string(region, bucket, key, keep_local_copy=True, encoding='utf-8', **kwargs):
    """Download *key* and return its text content.

    Extra keyword arguments go to :class:`S3Operations`.
    """
    ops = S3Operations(region, bucket, **kwargs)
    return ops.fetch_text(key, keep_local_copy=keep_local_copy, encoding=encoding)


def get_properties(region, bucket, key, keep_local_copy=True, encoding='utf-8', **kwargs):
    """Download *key* and parse it as a properties document.

    Raises:
        ObjectDownloadError: if the download fails
        PropertiesError: if the content cannot be parsed
    """
    text = get_file_as_string(
        region, bucket, key,
        keep_local_copy=keep_local_copy,
        encoding=encoding,
        **kwargs
    )
    return parse_properties(text)
