# This file is part of ec2launch. See LICENSE file for license information.
"""Main ec2launch module __init__."""

import logging

from ec2launch.ec2.cloud import EC2

__all__ = [
    "EC2",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
