# This file is part of ec2launch. See LICENSE file for license information.
"""Submit launch requests to EC2."""

import logging
import sys
from typing import List

from ec2launch.ec2.util import _provider_call
from ec2launch.types import InstanceHandle, LaunchSpecification

log = logging.getLogger(__name__)


def launch_instances(
    client, spec: LaunchSpecification, out=None
) -> List[InstanceHandle]:
    """Launch the instances described by `spec`.

    The request is sent once. A failure is raised as ProviderError and
    never retried.

    Args:
        client: boto3 EC2 client
        spec: launch specification to submit
        out: text stream for the creation notices, defaults to stdout

    Returns:
        one InstanceHandle per created instance, in response order
    """
    out = out or sys.stdout
    log.debug("launching %s from %s", spec.instance_type, spec.image_id)
    with _provider_call("RunInstances"):
        response = client.run_instances(**spec.to_request())

    handles = []
    print("\nNew instances have been created.", file=out)
    for instance in response["Instances"]:
        handle = InstanceHandle(instance["InstanceId"])
        log.debug("created instance %s", handle.instance_id)
        print("  New instance: {}".format(handle.instance_id), file=out)
        handles.append(handle)
    return handles
