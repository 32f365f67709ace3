# This file is part of ec2launch. See LICENSE file for license information.
"""Tokens used to stop waiting for instances.

The convergence loop checks its token once per cycle through `is_set()`,
so any object with that method can be used, whether the signal comes
from a terminal, a deadline or another thread.
"""

import logging
import os
import select
import sys
import termios
import threading
import time
import tty

log = logging.getLogger(__name__)


class CancellationToken:
    """Token cancelled explicitly through `cancel()`.

    Safe to cancel from another thread or from a signal handler.
    """

    def __init__(self):
        """Initialize an unset token."""
        self._event = threading.Event()

    def cancel(self):
        """Request the waiting loop to stop."""
        self._event.set()

    def is_set(self) -> bool:
        """Return True once cancel() has been called."""
        return self._event.is_set()


class DeadlineToken:
    """Token that becomes set once `seconds` have elapsed."""

    def __init__(self, seconds: float, clock=time.monotonic):
        """Start the countdown.

        Args:
            seconds: time allowed before the token is set
            clock: monotonic clock function, replaceable for testing
        """
        self._clock = clock
        self.deadline = clock() + seconds

    def is_set(self) -> bool:
        """Return True once the deadline has passed."""
        return self._clock() >= self.deadline


class KeypressToken:
    """Token set when the operator presses a key on the terminal.

    Used as a context manager, the terminal is switched to cbreak mode so
    a single keypress is seen without waiting for Enter. When the stream
    is not a terminal the token is never set.
    """

    def __init__(self, stream=None):
        """Set up the token.

        Args:
            stream: input stream to watch, defaults to sys.stdin
        """
        self._stream = stream if stream is not None else sys.stdin
        self._saved_attrs = None
        self._pressed = False

    @property
    def interactive(self) -> bool:
        """Return True if the stream is attached to a terminal."""
        try:
            return self._stream.isatty()
        except ValueError:
            # closed stream
            return False

    def __enter__(self):
        """Put the terminal in cbreak mode."""
        if self.interactive:
            fd = self._stream.fileno()
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        return self

    def __exit__(self, _type, _value, _traceback):
        """Restore the terminal settings."""
        if self._saved_attrs is not None:
            termios.tcsetattr(
                self._stream.fileno(), termios.TCSADRAIN, self._saved_attrs
            )
            self._saved_attrs = None

    def is_set(self) -> bool:
        """Return True if a key was pressed, without blocking."""
        if self._pressed:
            return True
        if not self.interactive:
            return False
        readable, _, _ = select.select([self._stream], [], [], 0)
        if readable:
            # consume the key so it does not leak into the shell
            os.read(self._stream.fileno(), 1)
            log.debug("keypress detected, stop waiting")
            self._pressed = True
        return self._pressed


class AnyToken:
    """Token set as soon as any of its children is set."""

    def __init__(self, *tokens):
        """Combine tokens; None entries are ignored."""
        self.tokens = [t for t in tokens if t is not None]

    def is_set(self) -> bool:
        """Return True if any child token is set."""
        return any(token.is_set() for token in self.tokens)
