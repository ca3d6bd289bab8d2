"""Utility modules for bucketpull."""

from .config_loader import ConfigLoader, handle_config_update
from .file_utils import ensure_dir, clear_directory_contents, key_to_local_path
from .logger import get_logger, setup_logging
from .aws_utils import create_boto3_session, create_s3_client

__all__ = [
    'ConfigLoader',
    'handle_config_update',
    'ensure_dir',
    'clear_directory_contents',
    'key_to_local_path',
    'get_logger',
    'setup_logging',
    'create_boto3_session',
    'create_s3_client',
]
