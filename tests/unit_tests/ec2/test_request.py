"""Tests related to ec2launch.ec2.request module."""

import pytest

from ec2launch.ec2.request import DEFAULT_INSTANCE_TYPE, build_request
from ec2launch.types import LaunchParameters, LaunchSpecification

FLAT = LaunchParameters(
    security_group_id="sg-abc123",
    image_id="ami-xyz789",
    key_pair_name="mykey",
)
SUBNET = LaunchParameters(
    security_group_id="sg-abc123",
    image_id="ami-xyz789",
    key_pair_name="mykey",
    subnet_id="subnet-111",
)


class TestBuildRequest:
    """Tests for build_request."""

    def test_flat_networking(self):
        spec = build_request(FLAT)

        assert spec.security_group_ids == ("sg-abc123",)
        assert spec.network_interfaces is None
        assert spec.to_request() == {
            "InstanceType": DEFAULT_INSTANCE_TYPE,
            "MinCount": 1,
            "MaxCount": 1,
            "ImageId": "ami-xyz789",
            "KeyName": "mykey",
            "SecurityGroupIds": ["sg-abc123"],
        }

    def test_subnet_networking(self):
        spec = build_request(SUBNET)

        assert spec.security_group_ids is None
        assert len(spec.network_interfaces) == 1
        request = spec.to_request()
        assert "SecurityGroupIds" not in request
        assert request["NetworkInterfaces"] == [
            {
                "DeviceIndex": 0,
                "SubnetId": "subnet-111",
                "Groups": ["sg-abc123"],
                "AssociatePublicIpAddress": True,
            }
        ]
        assert request["ImageId"] == "ami-xyz789"
        assert request["KeyName"] == "mykey"
        assert (request["MinCount"], request["MaxCount"]) == (1, 1)

    @pytest.mark.parametrize("params", [FLAT, SUBNET], ids=["flat", "subnet"])
    def test_deterministic(self, params):
        assert build_request(params) == build_request(params)
        assert build_request(params).to_request() == (
            build_request(params).to_request()
        )

    def test_instance_type_override(self):
        spec = build_request(FLAT, instance_type="t3.small")
        assert spec.to_request()["InstanceType"] == "t3.small"

    def test_default_instance_type(self):
        assert DEFAULT_INSTANCE_TYPE == "t2.micro"


class TestLaunchSpecification:
    """Tests for LaunchSpecification topology checks."""

    def test_rejects_both_topologies(self):
        nic = build_request(SUBNET).network_interfaces
        with pytest.raises(ValueError):
            LaunchSpecification(
                instance_type="t2.micro",
                image_id="ami-1",
                key_name="k",
                security_group_ids=("sg-1",),
                network_interfaces=nic,
            )

    def test_rejects_no_topology(self):
        with pytest.raises(ValueError):
            LaunchSpecification(
                instance_type="t2.micro", image_id="ami-1", key_name="k"
            )
