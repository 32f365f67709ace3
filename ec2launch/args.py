# This file is part of ec2launch. See LICENSE file for license information.
"""Command line token parsing and launch argument validation."""

from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from ec2launch.errors import ValidationError
from ec2launch.types import LaunchParameters

GROUP_ID_KEYS = ("-g", "--group-id")
AMI_ID_KEYS = ("-a", "--ami-id")
KEYPAIR_KEYS = ("-k", "--keypair-name")
SUBNET_ID_KEYS = ("-s", "--subnet-id")

NO_KEY_PREFIX = "--NoKey"


def parse(tokens: Sequence[str]) -> Mapping[str, str]:
    """Parse tokens of the form "--key value" or "-k value".

    A key without a matching value maps to itself (dashes included). A
    value without a matching key is stored under "--NoKeyN", N counting
    up from 0. If a key is repeated the last value wins.

    Args:
        tokens: command line arguments, without the program name

    Returns:
        read-only mapping of keys to values
    """
    parsed = {}
    i = 0
    n = 0
    while i < len(tokens):
        token = tokens[i]
        i += 1
        if token.startswith("-"):
            value = token
            if i < len(tokens) and not tokens[i].startswith("-"):
                value = tokens[i]
                i += 1
            parsed[token] = value
        else:
            parsed["{}{}".format(NO_KEY_PREFIX, n)] = token
            n += 1
    return MappingProxyType(parsed)


def get_argument(
    parsed: Mapping[str, str], default: Optional[str], *keys: str
) -> Optional[str]:
    """Return the value of the first of `keys` present in `parsed`."""
    for key in keys:
        if key in parsed:
            return parsed[key]
    return default


def extract_parameters(parsed: Mapping[str, str]) -> LaunchParameters:
    """Validate parsed arguments and build LaunchParameters.

    Raises:
        ValidationError: listing every argument that is missing or
            malformed
    """
    group_id = get_argument(parsed, None, *GROUP_ID_KEYS)
    ami_id = get_argument(parsed, None, *AMI_ID_KEYS)
    keypair_name = get_argument(parsed, None, *KEYPAIR_KEYS)
    subnet_id = get_argument(parsed, None, *SUBNET_ID_KEYS)

    problems = []
    if not group_id or not group_id.startswith("sg-"):
        problems.append("-g/--group-id must be a security group id (sg-...)")
    if not ami_id or not ami_id.startswith("ami-"):
        problems.append("-a/--ami-id must be an image id (ami-...)")
    # a flag given without a value maps to itself
    if not keypair_name or keypair_name in KEYPAIR_KEYS:
        problems.append("-k/--keypair-name is required")
    if subnet_id and not subnet_id.startswith("subnet-"):
        problems.append("-s/--subnet-id must be a subnet id (subnet-...)")
    if problems:
        raise ValidationError(problems)

    return LaunchParameters(
        security_group_id=group_id,
        image_id=ami_id,
        key_pair_name=keypair_name,
        subnet_id=subnet_id or None,
    )
