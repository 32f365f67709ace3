import logging

import mock
import pytest

logging.basicConfig(level=logging.NOTSET)


@pytest.fixture(name="no_config_files", autouse=True)
def no_config_files_fixture(monkeypatch, tmp_path):
    """Keep tests away from the configuration files of the host."""
    monkeypatch.delenv("EC2LAUNCH_CONFIG", raising=False)
    monkeypatch.setattr(
        "ec2launch.config.CONFIG_PATHS",
        [tmp_path / "ec2launch.toml", tmp_path / "etc-ec2launch.toml"],
    )


@pytest.fixture(name="ec2_client")
def ec2_client_fixture():
    """Fake boto3 EC2 client."""
    return mock.Mock(name="ec2_client")


@pytest.fixture(name="make_instance")
def make_instance_fixture():
    """Return a builder of describe_instances `Instances` items."""

    def _make_instance(
        instance_id,
        code=16,
        name="running",
        vpc_id="vpc-1",
        public_ip="203.0.113.10",
        public_dns="ec2-203-0-113-10.compute-1.amazonaws.com",
        key_name="mykey",
    ):
        return {
            "InstanceId": instance_id,
            "State": {"Code": code, "Name": name},
            "VpcId": vpc_id,
            "PublicIpAddress": public_ip,
            "PublicDnsName": public_dns,
            "KeyName": key_name,
        }

    return _make_instance


@pytest.fixture(name="describe_response")
def describe_response_fixture():
    """Return a function wrapping instances in one reservation."""

    def _describe_response(*instances):
        return {"Reservations": [{"Instances": list(instances)}]}

    return _describe_response
