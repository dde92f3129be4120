#!/usr/bin/env python3
"""
KUBEDISPATCH CORE MODELS
------------------------
Defines the data structures shared by every stage of an exec dispatch:
the objects a command targets, the resolved attach mode, the built
invocation and the outcome reported back for each object.

Author: KubeDispatch Team
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, List

from kubedispatch.core.errors import DispatchError


@dataclass(frozen=True)
class TargetObject:
    """
    A single cluster resource selected as the operand of a command.

    Owned by whoever built the selection; the dispatcher only reads it.
    """
    name: str
    namespace: Optional[str] = None   # Required for exec; absence makes the object ineligible
    kind: str = "pod"                 # Lower-case resource kind (pod, deployment, ...)

    def is_pod(self) -> bool:
        return self.kind.lower() in ("pod", "pods", "po")


@dataclass(frozen=True)
class ClusterContext:
    """The currently active named connection target (kubeconfig context)."""
    name: str


class AttachMode(Enum):
    """
    Resolved combination of (tty, stdin). The value is the kubectl flag
    used verbatim; NONE has an empty token and is omitted from argv.
    """
    INTERACTIVE_TTY = "-it"
    TTY_ONLY = "-t"
    STDIN_ONLY = "-i"
    NONE = ""

    @property
    def token(self) -> str:
        return self.value


class FlagState(Enum):
    """Parsing-boundary state of an optional boolean flag."""
    ABSENT = "absent"
    PRESENT = "present"       # Given with no value
    EXPLICIT = "explicit"     # Given with a parsed boolean value


@dataclass(frozen=True)
class FlagInput:
    state: FlagState = FlagState.ABSENT
    value: Optional[bool] = None

    @classmethod
    def absent(cls) -> "FlagInput":
        return cls(FlagState.ABSENT)

    @classmethod
    def present(cls) -> "FlagInput":
        return cls(FlagState.PRESENT)

    @classmethod
    def explicit(cls, value: bool) -> "FlagInput":
        return cls(FlagState.EXPLICIT, bool(value))


@dataclass(frozen=True)
class Invocation:
    """
    An ordered, immutable argument vector for one process launch.
    argv[0] is the program to run.
    """
    argv: Tuple[str, ...]

    @property
    def program(self) -> str:
        return self.argv[0]


@dataclass(frozen=True)
class ExecutionOutcome:
    """Success, or a classified failure carrying a human readable cause."""
    error: Optional[DispatchError] = None

    @classmethod
    def success(cls) -> "ExecutionOutcome":
        return cls()

    @classmethod
    def failure(cls, error: DispatchError) -> "ExecutionOutcome":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return str(self.error) if self.error else ""


@dataclass
class ExecRequest:
    """
    Options of a single exec call, already parsed by the command line.
    terminal is None when --terminal was not given, "" when it was given
    without a launcher, and the launcher string otherwise.
    """
    command: List[str]
    container: Optional[str] = None
    terminal: Optional[str] = None
    tty: FlagInput = field(default_factory=FlagInput.absent)
    stdin: FlagInput = field(default_factory=FlagInput.absent)

    @property
    def in_terminal(self) -> bool:
        return self.terminal is not None
