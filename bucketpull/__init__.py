"""
bucketpull — fetch files, properties documents and whole key prefixes
from an S3-compatible object store to local disk.
"""

__version__ = "1.0.0"
