# This file is part of ec2launch. See LICENSE file for license information.
"""EC2 Util Functions."""

import contextlib

import boto3
import botocore
from botocore.config import Config as BotoConfig

from ec2launch.errors import CloudSetupError, ProviderError

DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_READ_TIMEOUT = 60
# A single attempt: failed calls are reported, never retried
DEFAULT_MAX_ATTEMPTS = 1


def _get_session(access_key_id, secret_access_key, region):
    """Get EC2 session.

    Args:
        access_key_id: user's access key ID
        secret_access_key: user's secret access key
        region: region to login to

    Returns:
        boto3 session object

    """
    mysess = botocore.session.get_session()
    return boto3.Session(
        botocore_session=mysess,
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key,
        region_name=region,
    )


def _get_client_config(
    connect_timeout=DEFAULT_CONNECT_TIMEOUT,
    read_timeout=DEFAULT_READ_TIMEOUT,
    max_attempts=DEFAULT_MAX_ATTEMPTS,
):
    """Build the botocore client configuration.

    Args:
        connect_timeout: seconds to wait for a connection
        read_timeout: seconds to wait for a response
        max_attempts: total attempts per call, including the first one

    Returns:
        botocore.config.Config object
    """
    return BotoConfig(
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        retries={"total_max_attempts": max_attempts},
    )


@contextlib.contextmanager
def _provider_call(operation):
    """Turn botocore failures of `operation` into ProviderError."""
    try:
        yield
    except botocore.exceptions.ClientError as e:
        error = e.response.get("Error", {})
        raise ProviderError(
            operation, code=error.get("Code"), message=error.get("Message")
        ) from e
    except botocore.exceptions.NoCredentialsError as e:
        raise CloudSetupError(
            "Please configure ec2 credentials in $HOME/.aws/credentials"
        ) from e
    except botocore.exceptions.BotoCoreError as e:
        raise ProviderError(operation, message=str(e)) from e
