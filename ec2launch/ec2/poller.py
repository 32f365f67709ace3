# This file is part of ec2launch. See LICENSE file for license information.
"""Wait for launched instances to leave the pending state."""

import logging
import math
import sys
import time
from typing import List, Sequence

from ec2launch.ec2.util import _provider_call
from ec2launch.errors import ReservationMismatchError
from ec2launch.types import (
    ConvergenceOutcome,
    ConvergenceResult,
    InstanceHandle,
    InstanceSnapshot,
)

DEFAULT_POLL_INTERVAL = 2.0


def to_interval(value) -> float:
    """Convert `value` to a number of seconds usable with time.sleep.

    Raises:
        ValueError: value is not a finite, non-negative number
    """
    seconds = float(value)
    if not math.isfinite(seconds) or seconds < 0:
        raise ValueError(
            "Expected a finite, non-negative number of seconds, "
            "got {!r}".format(value)
        )
    return seconds


class ConvergencePoller:
    """Poll describe_instances until no instance is pending.

    Each cycle queries the requested instances once. When every instance
    has left the pending state the loop ends. Otherwise it sleeps for the
    fixed interval and then checks the cancellation token; a set token
    ends the loop with the snapshots of the query just made.
    """

    def __init__(
        self,
        client,
        interval: float = DEFAULT_POLL_INTERVAL,
        token=None,
        out=None,
        sleep=None,
    ):
        """Set up the poller.

        Args:
            client: boto3 EC2 client
            interval: seconds to sleep between two queries
            token: object with an is_set() method, checked once per cycle
            out: text stream for the progress dots, defaults to stdout
            sleep: sleep function, replaceable for testing
        """
        self._log = logging.getLogger(
            "{}.{}".format(__name__, self.__class__.__name__)
        )
        self._client = client
        self.interval = to_interval(interval)
        self.token = token
        self._out = out or sys.stdout
        self._sleep = sleep or time.sleep

    def __repr__(self):
        """Create string representation for class."""
        return "{}(client={}, interval={}, token={})".format(
            self.__class__.__name__,
            self._client,
            self.interval,
            self.token,
        )

    def describe(self, instance_ids: List[str]) -> List[InstanceSnapshot]:
        """Query the current state of exactly `instance_ids`.

        Raises:
            ProviderError: the query failed
            ReservationMismatchError: the response is not one reservation
                holding one instance per requested id
        """
        with _provider_call("DescribeInstances"):
            response = self._client.describe_instances(
                InstanceIds=instance_ids
            )

        reservations = response.get("Reservations", [])
        instances = []
        if reservations:
            instances = reservations[0].get("Instances", [])
        if len(reservations) != 1 or len(instances) != len(instance_ids):
            raise ReservationMismatchError(
                expected=len(instance_ids),
                reservations=len(reservations),
                instances=len(instances),
            )
        return [InstanceSnapshot.from_instance(i) for i in instances]

    def wait(self, handles: Sequence[InstanceHandle]) -> ConvergenceResult:
        """Block until every instance has left the pending state.

        Args:
            handles: instances to wait for, must not be empty

        Returns:
            ConvergenceResult holding the snapshots of the last query and
            whether waiting ended by convergence or cancellation
        """
        if not handles:
            raise ValueError("At least one instance handle is required")

        instance_ids = [h.instance_id for h in handles]
        self._log.debug("waiting for instances %s", ", ".join(instance_ids))
        cycles = 0
        while True:
            cycles += 1
            self._out.write(".")
            self._out.flush()

            snapshots = self.describe(instance_ids)
            pending = [s.instance_id for s in snapshots if not s.left_pending]
            if not pending:
                self._log.debug("nothing pending after %d cycles", cycles)
                return ConvergenceResult(
                    ConvergenceOutcome.CONVERGED, snapshots, cycles
                )
            self._log.debug("still pending: %s", ", ".join(pending))

            self._sleep(self.interval)
            if self.token is not None and self.token.is_set():
                self._log.debug("stopped waiting after %d cycles", cycles)
                return ConvergenceResult(
                    ConvergenceOutcome.CANCELLED, snapshots, cycles
                )


def await_convergence(client, handles, **kwargs) -> ConvergenceResult:
    """Wait for `handles` with a ConvergencePoller built from kwargs."""
    return ConvergencePoller(client, **kwargs).wait(handles)
