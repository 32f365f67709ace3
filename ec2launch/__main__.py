# This file is part of ec2launch. See LICENSE file for license information.
"""Allow running ec2launch with `python -m ec2launch`."""

import sys

from ec2launch.cli import main

if __name__ == "__main__":
    sys.exit(main())
