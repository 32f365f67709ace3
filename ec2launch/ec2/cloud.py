# This file is part of ec2launch. See LICENSE file for license information.
"""AWS EC2 launcher."""

import logging
from typing import List, Optional

import botocore

from ec2launch.config import ConfigFile, parse_config
from ec2launch.ec2.launcher import launch_instances
from ec2launch.ec2.poller import (
    DEFAULT_POLL_INTERVAL,
    ConvergencePoller,
    to_interval,
)
from ec2launch.ec2.request import DEFAULT_INSTANCE_TYPE, build_request
from ec2launch.ec2.util import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_READ_TIMEOUT,
    _get_client_config,
    _get_session,
)
from ec2launch.errors import CloudSetupError
from ec2launch.types import ConvergenceResult, InstanceHandle, LaunchParameters


class EC2:
    """Launch EC2 instances and wait for them to start."""

    _type = "ec2"

    def __init__(
        self,
        config_file: Optional[ConfigFile] = None,
        *,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        region: Optional[str] = None,
        out=None,
    ):
        """Initialize the connection to EC2.

        boto3 will read a users /home/$USER/.aws/* files if no
        arguments are provided here to find values.

        Args:
            config_file: path to ec2launch configuration file
            access_key_id: user's access key ID
            secret_access_key: user's secret access key
            region: region to login to
            out: text stream for console output, defaults to stdout
        """
        self._log = logging.getLogger(
            "{}.{}".format(__name__, self.__class__.__name__)
        )
        self._out = out
        self._check_and_set_config(
            config_file, [access_key_id, secret_access_key, region]
        )
        self._log.debug("logging into EC2")

        try:
            session = _get_session(
                access_key_id or self.config.get("access_key_id"),
                secret_access_key or self.config.get("secret_access_key"),
                region or self.config.get("region"),
            )
            client_config = _get_client_config(
                connect_timeout=self.config.get(
                    "connect_timeout", DEFAULT_CONNECT_TIMEOUT
                ),
                read_timeout=self.config.get(
                    "read_timeout", DEFAULT_READ_TIMEOUT
                ),
                max_attempts=self.config.get(
                    "max_attempts", DEFAULT_MAX_ATTEMPTS
                ),
            )
            self.client = session.client("ec2", config=client_config)
            self.region = session.region_name
        except botocore.exceptions.NoRegionError as e:
            raise CloudSetupError(
                "Please configure default region in $HOME/.aws/config"
            ) from e
        except botocore.exceptions.NoCredentialsError as e:
            raise CloudSetupError(
                "Please configure ec2 credentials in $HOME/.aws/credentials"
            ) from e

        self.instance_type = self.config.get(
            "instance_type", DEFAULT_INSTANCE_TYPE
        )
        poll_interval = self.config.get("poll_interval", DEFAULT_POLL_INTERVAL)
        try:
            self.poll_interval = to_interval(poll_interval)
        except (TypeError, ValueError) as e:
            raise CloudSetupError(
                "poll_interval in ec2launch.toml must be a non-negative "
                "number of seconds, got {!r}".format(poll_interval)
            ) from e

    def _check_and_set_config(self, config_file, required_values):
        """Set ec2launch configuration.

        If every required value was passed to the constructor, the config
        file is not read. Otherwise the values passed in work as overrides
        of the `[ec2]` table of the config file, if there is one. A config
        file given explicitly must exist.
        """
        if all(v is not None for v in required_values):
            self.config = {}
            return
        try:
            self.config = parse_config(config_file).get(self._type, {})
        except ValueError as e:
            raise CloudSetupError(str(e)) from e

    def launch(
        self, params: LaunchParameters, *, instance_type: Optional[str] = None
    ) -> List[InstanceHandle]:
        """Launch one instance.

        Args:
            params: validated launch parameters
            instance_type: overrides the configured instance type

        Returns:
            handles of the created instances
        """
        spec = build_request(params, instance_type or self.instance_type)
        self._log.debug(
            "launching instance in %s networking",
            "subnet" if spec.network_interfaces else "flat",
        )
        return launch_instances(self.client, spec, out=self._out)

    def wait_for_convergence(
        self,
        handles: List[InstanceHandle],
        token=None,
        interval: Optional[float] = None,
    ) -> ConvergenceResult:
        """Wait for `handles` to leave the pending state.

        Args:
            handles: instances to wait for
            token: cancellation token checked once per cycle
            interval: overrides the configured poll interval
        """
        poller = ConvergencePoller(
            self.client,
            interval=self.poll_interval if interval is None else interval,
            token=token,
            out=self._out,
        )
        return poller.wait(handles)

    def launch_and_wait(
        self,
        params: LaunchParameters,
        token=None,
        *,
        instance_type: Optional[str] = None,
        interval: Optional[float] = None,
    ) -> ConvergenceResult:
        """Launch one instance and wait for it to start."""
        handles = self.launch(params, instance_type=instance_type)
        return self.wait_for_convergence(
            handles, token=token, interval=interval
        )
