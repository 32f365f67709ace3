"""Test the args.py module."""

import pytest

from ec2launch.args import extract_parameters, get_argument, parse
from ec2launch.errors import ValidationError
from ec2launch.types import LaunchParameters


class TestParse:
    """Tests for the token parser."""

    def test_key_value_pairs(self):
        parsed = parse(["-g", "sg-1", "--ami-id", "ami-1"])
        assert dict(parsed) == {"-g": "sg-1", "--ami-id": "ami-1"}

    def test_key_without_value_maps_to_itself(self):
        parsed = parse(["-v", "-k", "mykey", "--flag"])
        assert dict(parsed) == {"-v": "-v", "-k": "mykey", "--flag": "--flag"}

    def test_values_without_key(self):
        parsed = parse(["first", "-k", "mykey", "second", "third"])
        assert dict(parsed) == {
            "--NoKey0": "first",
            "-k": "mykey",
            "--NoKey1": "second",
            "--NoKey2": "third",
        }

    def test_last_repeated_key_wins(self):
        assert parse(["-k", "a", "-k", "b"])["-k"] == "b"

    def test_empty(self):
        assert not parse([])

    def test_result_is_read_only(self):
        parsed = parse(["-k", "mykey"])
        with pytest.raises(TypeError):
            parsed["-k"] = "other"  # type: ignore


class TestGetArgument:
    """Tests for get_argument."""

    def test_first_present_key_wins(self):
        parsed = parse(["--group-id", "sg-long", "-g", "sg-short"])
        assert get_argument(parsed, None, "-g", "--group-id") == "sg-short"

    def test_default(self):
        assert get_argument(parse([]), "dflt", "-g", "--group-id") == "dflt"


class TestExtractParameters:
    """Tests for extract_parameters."""

    def test_flat(self):
        parsed = parse(["-g", "sg-abc123", "-a", "ami-xyz789", "-k", "mykey"])
        assert extract_parameters(parsed) == LaunchParameters(
            security_group_id="sg-abc123",
            image_id="ami-xyz789",
            key_pair_name="mykey",
            subnet_id=None,
        )

    def test_long_flags_with_subnet(self):
        parsed = parse(
            [
                "--group-id",
                "sg-abc123",
                "--ami-id",
                "ami-xyz789",
                "--keypair-name",
                "mykey",
                "--subnet-id",
                "subnet-111",
            ]
        )
        assert extract_parameters(parsed).subnet_id == "subnet-111"

    @pytest.mark.parametrize(
        ["tokens", "expected_problems"],
        [
            pytest.param(
                ["-g", "sg-abc123", "-a", "ami-xyz789"],
                ["-k/--keypair-name"],
                id="missing-keypair",
            ),
            pytest.param(
                ["-g", "sg-abc123", "-a", "ami-xyz789", "-k"],
                ["-k/--keypair-name"],
                id="keypair-without-value",
            ),
            pytest.param(
                ["-g", "abc123", "-a", "ami-xyz789", "-k", "mykey"],
                ["-g/--group-id"],
                id="bad-group-prefix",
            ),
            pytest.param(
                ["-g", "sg-abc123", "-a", "xyz789", "-k", "mykey"],
                ["-a/--ami-id"],
                id="bad-ami-prefix",
            ),
            pytest.param(
                ["-g", "sg-1", "-a", "ami-1", "-k", "k", "-s", "vpc-1"],
                ["-s/--subnet-id"],
                id="bad-subnet-prefix",
            ),
            pytest.param(
                [],
                ["-g/--group-id", "-a/--ami-id", "-k/--keypair-name"],
                id="all-missing",
            ),
        ],
    )
    def test_invalid(self, tokens, expected_problems):
        with pytest.raises(ValidationError) as exc_info:
            extract_parameters(parse(tokens))
        problems = exc_info.value.problems
        assert len(problems) == len(expected_problems)
        for problem, expected in zip(problems, expected_problems):
            assert problem.startswith(expected)
