# This file is part of ec2launch. See LICENSE file for license information.
"""Command line entry point: launch an EC2 instance and wait for it."""

import logging
import sys
from pathlib import Path

from ec2launch import args
from ec2launch.cancellation import AnyToken, DeadlineToken, KeypressToken
from ec2launch.ec2.cloud import EC2
from ec2launch.ec2.poller import to_interval
from ec2launch.errors import (
    CloudSetupError,
    ProviderError,
    ReservationMismatchError,
    ValidationError,
)

EXIT_OK = 0
EXIT_VALIDATION = 1
EXIT_SETUP = 2
EXIT_PROVIDER = 3
EXIT_INVARIANT = 4

INSTANCE_TYPE_KEYS = ("-t", "--instance-type")
INTERVAL_KEYS = ("-i", "--interval")
MAX_WAIT_KEYS = ("-w", "--max-wait")
REGION_KEYS = ("-r", "--region")
CONFIG_KEYS = ("-c", "--config")
VERBOSE_KEYS = ("-v", "--verbose")

HELP = """
Usage: ec2-launch-instance -g <group-id> -a <ami-id> -k <keypair-name> [-s <subnet-id>]
  -g, --group-id: The ID of the security group.
  -a, --ami-id: The ID of an Amazon Machine Image.
  -k, --keypair-name: The name of a key pair.
  -s, --subnet-id: The ID of a subnet. Required only for EC2 in a VPC.
  -t, --instance-type: Instance type to launch (default: t2.micro).
  -i, --interval: Seconds between two state checks (default: 2).
  -w, --max-wait: Stop waiting after this many seconds.
  -r, --region: AWS region to launch in.
  -c, --config: Path to an ec2launch.toml configuration file.
  -v, --verbose: Show debug logging."""

log = logging.getLogger(__name__)


def print_help(out=None):
    """Print command line help."""
    print(HELP, file=out or sys.stdout)


def error_exit(msg, code=EXIT_VALIDATION, out=None):
    """Print an error message and return the exit code to use."""
    out = out or sys.stdout
    print("\nError", file=out)
    print(msg, file=out)
    return code


def _option(parsed, keys, convert=str):
    """Return the converted value of an optional flag, None if absent."""
    value = args.get_argument(parsed, None, *keys)
    if value is None:
        return None
    # a flag given without a value maps to itself
    if value in keys:
        raise ValidationError(["{} requires a value".format("/".join(keys))])
    try:
        return convert(value)
    except ValueError:
        raise ValidationError(
            ["{}: invalid value {!r}".format("/".join(keys), value)]
        ) from None


def print_report(result, out=None):
    """Print the final state of every instance."""
    out = out or sys.stdout
    if result.converged:
        print("\nNo more instances are pending.", file=out)
    else:
        print(
            "\nStopped waiting; some instances may still be pending.",
            file=out,
        )
    for snapshot in result.snapshots:
        print("For {}:".format(snapshot.instance_id), file=out)
        print("  VPC ID: {}".format(snapshot.vpc_id or ""), file=out)
        print("  Instance state: {}".format(snapshot.state_name), file=out)
        print(
            "  Public IP address: {}".format(snapshot.public_ip or ""),
            file=out,
        )
        print(
            "  Public DNS name: {}".format(snapshot.public_dns or ""),
            file=out,
        )
        print("  Key pair name: {}".format(snapshot.key_name), file=out)


def main(argv=None, out=None):
    """Run the launcher.

    Args:
        argv: command line arguments without the program name, defaults
            to sys.argv[1:]
        out: text stream for console output, defaults to stdout

    Returns:
        process exit code
    """
    out = out or sys.stdout
    parsed = args.parse(sys.argv[1:] if argv is None else argv)
    if not parsed:
        print_help(out)
        return EXIT_OK

    verbose = any(key in parsed for key in VERBOSE_KEYS)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    try:
        params = args.extract_parameters(parsed)
        instance_type = _option(parsed, INSTANCE_TYPE_KEYS)
        interval = _option(parsed, INTERVAL_KEYS, to_interval)
        max_wait = _option(parsed, MAX_WAIT_KEYS, to_interval)
        region = _option(parsed, REGION_KEYS)
        config_file = _option(parsed, CONFIG_KEYS, Path)
    except ValidationError as e:
        return error_exit(
            "{}\nRun the command with no arguments to see help.".format(e),
            out=out,
        )

    try:
        ec2 = EC2(config_file=config_file, region=region, out=out)
        handles = ec2.launch(params, instance_type=instance_type)

        print(
            "\nWaiting for the instances to start."
            "\nPress any key to stop waiting. "
            "(Response might be slightly delayed.)",
            file=out,
        )
        with KeypressToken() as keypress:
            deadline = None
            if max_wait is not None:
                deadline = DeadlineToken(max_wait)
            result = ec2.wait_for_convergence(
                handles, token=AnyToken(keypress, deadline), interval=interval
            )
    except CloudSetupError as e:
        log.debug("setup failed", exc_info=True)
        return error_exit(str(e), EXIT_SETUP, out=out)
    except ProviderError as e:
        log.debug("provider call failed", exc_info=True)
        return error_exit(str(e), EXIT_PROVIDER, out=out)
    except ReservationMismatchError as e:
        log.debug("unexpected describe response", exc_info=True)
        return error_exit(str(e), EXIT_INVARIANT, out=out)

    print_report(result, out)
    return EXIT_OK
