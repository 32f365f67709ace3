"""Module containing ec2launch errors.

Every error raised on purpose by ec2launch inherits from
`Ec2LaunchException`, so client code can catch all of them at once.
"""

from typing import List, Optional


class Ec2LaunchException(Exception):
    """Root ec2launch exception.

    This exception is not meant to be raised by ec2launch. The intention
    is that every custom ec2launch exception will inherit from this one,
    allowing client code to catch any exception by catching this one.
    """


class ValidationError(Ec2LaunchException):
    """Raised when launch arguments are missing or malformed.

    Examples:
    ---------
    >>> e = ValidationError(["group id must start with 'sg-'"])
    >>> e.problems
    ["group id must start with 'sg-'"]
    """

    def __init__(self, problems: List[str]):
        """Init method.

        :param problems: Human readable description of each failed check
        """
        super().__init__()
        self.problems = problems

    def __str__(self) -> str:  # noqa: D105
        return "One or more of the required arguments is missing or " + (
            "incorrect: {}".format("; ".join(self.problems))
        )


class CloudSetupError(Ec2LaunchException):
    """Raised if there is some problem with the EC2 client set up."""


class CloudError(Ec2LaunchException):
    """Represents errors coming from the cloud SDK."""


class ProviderError(CloudError):
    """Raised when a call to the EC2 API fails.

    The originating botocore exception is kept as ``__cause__``.
    """

    def __init__(
        self,
        operation: str,
        code: Optional[str] = None,
        message: Optional[str] = None,
    ):
        """Init method.

        :param operation: API operation that failed, e.g. `RunInstances`
        :param code: AWS error code, when the service returned one
        :param message: error message
        """
        super().__init__()
        self.operation = operation
        self.code = code
        self.message = message

    def __str__(self) -> str:  # noqa: D105
        msg = f"{self.operation} failed"
        if self.code:
            msg += f" ({self.code})"
        if self.message:
            msg += f": {self.message}"
        return msg


class ReservationMismatchError(CloudError):
    """Raised when a describe response does not match the launched batch.

    A single launch produces a single reservation, so the describe
    response must hold exactly one reservation with one instance per
    requested id.
    """

    def __init__(self, expected: int, reservations: int, instances: int):
        """Init method.

        :param expected: number of instance ids that were requested
        :param reservations: number of reservations returned
        :param instances: number of instances in the first reservation
        """
        super().__init__()
        self.expected = expected
        self.reservations = reservations
        self.instances = instances

    def __str__(self) -> str:  # noqa: D105
        return (
            f"Expected 1 reservation holding {self.expected} instance(s), "
            f"got {self.reservations} reservation(s) holding "
            f"{self.instances} instance(s)"
        )
