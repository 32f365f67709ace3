# This file is part of ec2launch. See LICENSE file for license information.
"""This module contains types and enums used by ec2launch."""

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

# Lower byte of the EC2 state code. 0 is "pending".
STATE_CODE_MASK = 0xFF


@dataclass(frozen=True)
class LaunchParameters:
    """Validated operator input for a launch.

    subnet_id selects the networking topology: when it is None the
    security group is attached directly to the instance, otherwise the
    instance is placed in the subnet through a network interface.
    """

    security_group_id: str
    image_id: str
    key_pair_name: str
    subnet_id: Optional[str] = None


@dataclass(frozen=True)
class NetworkInterfaceSpec:
    """Network interface descriptor for subnet-scoped launches."""

    subnet_id: str
    groups: Tuple[str, ...]
    device_index: int = 0
    associate_public_ip_address: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the RunInstances `NetworkInterfaces` item."""
        return {
            "DeviceIndex": self.device_index,
            "SubnetId": self.subnet_id,
            "Groups": list(self.groups),
            "AssociatePublicIpAddress": self.associate_public_ip_address,
        }


@dataclass(frozen=True)
class LaunchSpecification:
    """Fully formed RunInstances request.

    Exactly one of security_group_ids and network_interfaces is set.
    """

    instance_type: str
    image_id: str
    key_name: str
    min_count: int = 1
    max_count: int = 1
    security_group_ids: Optional[Tuple[str, ...]] = None
    network_interfaces: Optional[Tuple[NetworkInterfaceSpec, ...]] = None

    def __post_init__(self):
        """Reject specifications carrying both or neither topology."""
        if (self.security_group_ids is None) == (
            self.network_interfaces is None
        ):
            raise ValueError(
                "Exactly one of security_group_ids and network_interfaces "
                "must be set"
            )

    def to_request(self) -> Dict[str, Any]:
        """Return the keyword arguments for `EC2.Client.run_instances`."""
        request: Dict[str, Any] = {
            "InstanceType": self.instance_type,
            "MinCount": self.min_count,
            "MaxCount": self.max_count,
            "ImageId": self.image_id,
            "KeyName": self.key_name,
        }
        if self.network_interfaces is not None:
            request["NetworkInterfaces"] = [
                nic.to_dict() for nic in self.network_interfaces
            ]
        else:
            request["SecurityGroupIds"] = list(self.security_group_ids)
        return request


@dataclass(frozen=True)
class InstanceHandle:
    """Identifier of a launched instance."""

    instance_id: str


@dataclass(frozen=True)
class InstanceSnapshot:
    """Point in time view of an instance, built from describe_instances."""

    instance_id: str
    state_code: int
    state_name: str
    key_name: str
    vpc_id: Optional[str] = None
    public_ip: Optional[str] = None
    public_dns: Optional[str] = None

    @classmethod
    def from_instance(cls, instance: Mapping[str, Any]) -> "InstanceSnapshot":
        """Build a snapshot from a describe_instances `Instances` item."""
        state = instance.get("State", {})
        return cls(
            instance_id=instance["InstanceId"],
            state_code=int(state.get("Code", 0)),
            state_name=state.get("Name", ""),
            key_name=instance.get("KeyName", ""),
            vpc_id=instance.get("VpcId"),
            public_ip=instance.get("PublicIpAddress"),
            # EC2 reports an empty string until a name is assigned
            public_dns=instance.get("PublicDnsName") or None,
        )

    @property
    def left_pending(self) -> bool:
        """Return True once the instance is past the pending state."""
        return (self.state_code & STATE_CODE_MASK) > 0


@enum.unique
class ConvergenceOutcome(enum.Enum):
    """How the convergence loop ended."""

    CONVERGED = "converged"
    CANCELLED = "cancelled"

    def __str__(self):
        """Return the string representation of ConvergenceOutcome enum."""
        return self.value


@dataclass
class ConvergenceResult:
    """Final snapshots of a launched batch and how waiting ended."""

    outcome: ConvergenceOutcome
    snapshots: List[InstanceSnapshot] = field(default_factory=list)
    cycles: int = 0

    @property
    def converged(self) -> bool:
        """Return True if every instance left the pending state."""
        return self.outcome == ConvergenceOutcome.CONVERGED
