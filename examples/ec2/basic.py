#!/usr/bin/python3
# This file is part of ec2launch. See LICENSE file for license information.
"""Basic example of launching an EC2 instance and waiting for it."""

import signal

import ec2launch
from ec2launch.cancellation import AnyToken, CancellationToken, DeadlineToken
from ec2launch.errors import ProviderError
from ec2launch.types import LaunchParameters


def ec2_basic():
    """Launch an EC2 instance into a subnet.

    Credentials and region are determined by default by the AWS API
    libraries by looking at ~/.aws/credentials and ~/.aws/config.

    Waiting stops on its own after five minutes, or earlier on SIGTERM.
    The result tells which of the two happened.
    """
    stop = CancellationToken()
    signal.signal(signal.SIGTERM, lambda *_: stop.cancel())

    ec2 = ec2launch.EC2()
    params = LaunchParameters(
        security_group_id="sg-017bd7a009671e614",
        image_id="ami-02d1e544b84bf7502",
        key_pair_name="my-key",
        subnet_id="subnet-09ef9c1efa33d7ddd",
    )
    try:
        result = ec2.launch_and_wait(
            params, token=AnyToken(stop, DeadlineToken(300))
        )
    except ProviderError as error:
        print(error)
        return

    print("\n{} after {} checks".format(result.outcome, result.cycles))
    for snapshot in result.snapshots:
        print(snapshot.instance_id, snapshot.state_name, snapshot.public_ip)


if __name__ == "__main__":
    ec2_basic()
