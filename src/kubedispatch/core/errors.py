#!/usr/bin/env python3
"""
KUBEDISPATCH ERRORS - Failure Taxonomy
--------------------------------------
Every failure the dispatcher can report, plus the classifier that turns
low-level launch errors (OSError and friends) into one of them.

Author: KubeDispatch Team
Date: 2026-10-18
"""

import logging

logger = logging.getLogger("kubedispatch.errors")

KUBECTL_ABNORMAL_EXIT = "kubectl exited abnormally"


class DispatchError(Exception):
    """Base class for everything reported to the user."""
    category = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class PreconditionError(DispatchError):
    """No active context, or an object of the wrong kind."""
    category = "precondition"


class FlagValidationError(DispatchError):
    """Malformed boolean value on --tty / --stdin."""
    category = "validation"


class ConfigError(DispatchError):
    category = "config"


class BinaryMissingError(DispatchError):
    """The program to launch is not on the search path."""
    category = "binary-missing"

    def __init__(self, program: str):
        super().__init__(f"Could not find {program} binary. Is it in your PATH?")
        self.program = program


class LaunchIOError(DispatchError):
    """Any other failure while starting the child process."""
    category = "io"

    def __init__(self, cause: Exception):
        super().__init__(f"I/O error: {getattr(cause, 'strerror', None) or cause}")
        self.cause = cause


class AbnormalExitError(DispatchError):
    """Child ran but did not exit successfully. The exit code is not kept."""
    category = "abnormal-exit"

    def __init__(self, message: str = KUBECTL_ABNORMAL_EXIT):
        super().__init__(message)


def classify_launch_error(exc: Exception, program: str) -> DispatchError:
    """
    Maps an error raised while starting `program` onto the taxonomy.
    FileNotFoundError means the binary is missing; everything else, including
    the ValueError subprocess raises for a NUL byte in argv, is I/O.
    """
    if isinstance(exc, FileNotFoundError):
        logger.debug(f"Launch of '{program}' failed: not found")
        return BinaryMissingError(program)
    logger.debug(f"Launch of '{program}' failed: {exc}")
    return LaunchIOError(exc)
