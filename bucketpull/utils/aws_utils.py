"""AWS utilities for session management.

This module wraps boto3 session and S3 client creation so every failure
at that stage surfaces as a :class:`~bucketpull.errors.SessionError`.
"""
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import SessionError


def create_boto3_session(
    region_name: Optional[str] = None,
    profile_name: Optional[str] = None
):
    """Create a boto3 session against *region_name*.

    Credentials come from the SDK's default chain, or from the named
    profile when one is given.

    Args:
        region_name: AWS region
        profile_name: Optional AWS CLI profile name

    Returns:
        boto3.Session object

    Raises:
        SessionError: if the session cannot be created

    Example:
        >>> session = create_boto3_session('us-west-2')
        >>> s3 = session.client('s3')
    """
    try:
        return boto3.Session(
            region_name=region_name or None,
            profile_name=profile_name or None,
        )
    except (BotoCoreError, ClientError) as e:
        raise SessionError(f"Unable to connect to AWS: {e}") from e


def create_s3_client(session, connect_timeout=60, read_timeout=60):
    """Create an S3 client from *session* with the given timeouts.

    Raises:
        SessionError: if the client cannot be created
    """
    client_config = Config(
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        retries={"max_attempts": 0},
    )
    try:
        return session.client('s3', config=client_config)
    except (BotoCoreError, ClientError, ValueError) as e:
        raise SessionError(f"Unable to create S3 client: {e}") from e
