# This file is part of ec2launch. See LICENSE file for license information.
"""Build RunInstances requests from launch parameters."""

from ec2launch.types import (
    LaunchParameters,
    LaunchSpecification,
    NetworkInterfaceSpec,
)

DEFAULT_INSTANCE_TYPE = "t2.micro"


def build_request(
    params: LaunchParameters, instance_type: str = DEFAULT_INSTANCE_TYPE
) -> LaunchSpecification:
    """Put together the properties needed to launch one instance.

    Subnet-scoped launches carry the security group inside a network
    interface descriptor. EC2 rejects a top-level SecurityGroupIds next to
    NetworkInterfaces, so only one of the two is ever set.

    Args:
        params: validated launch parameters
        instance_type: EC2 instance type

    Returns:
        LaunchSpecification for a single instance
    """
    groups = (params.security_group_id,)
    common = {
        "instance_type": instance_type,
        "image_id": params.image_id,
        "key_name": params.key_pair_name,
        "min_count": 1,
        "max_count": 1,
    }

    if params.subnet_id:
        nic = NetworkInterfaceSpec(
            subnet_id=params.subnet_id,
            groups=groups,
            device_index=0,
            associate_public_ip_address=True,
        )
        return LaunchSpecification(network_interfaces=(nic,), **common)

    return LaunchSpecification(security_group_ids=groups, **common)
