#!/usr/bin/env python3
"""
KUBEDISPATCH EXECUTION STRATEGIES
---------------------------------
Two ways of running a built Invocation:

1. InlineStrategy: child shares our stdin/stdout/stderr and we block until
   it exits. The exit status decides success.
2. TerminalStrategy: child is started detached inside a terminal launcher
   and never waited on. A successful start is reported as success; what
   the command does afterwards is not observable from here.

Author: KubeDispatch Team
Date: 2026-10-18
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console
from rich.markup import escape

from kubedispatch.core.errors import AbnormalExitError, classify_launch_error
from kubedispatch.core.models import (
    AttachMode, ExecRequest, ExecutionOutcome, Invocation, TargetObject
)
from kubedispatch.dispatch.invocation import build_invocation

logger = logging.getLogger("kubedispatch.strategies")


class ExecutionStrategy(ABC):
    """Shared interface: build an Invocation for one object, then run it."""

    in_terminal = False

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def build(self, context_name: str, target: TargetObject, mode: AttachMode,
              request: ExecRequest) -> Invocation:
        return build_invocation(
            context_name, target, mode, request.command,
            container=request.container,
            in_terminal=self.in_terminal,
            launcher=self.launcher,
        )

    @property
    def launcher(self) -> Optional[str]:
        return None

    @abstractmethod
    def run(self, invocation: Invocation, target: TargetObject) -> ExecutionOutcome:
        """Launches the invocation once. Never raises for launch failures."""

    def execute(self, context_name: str, target: TargetObject, mode: AttachMode,
                request: ExecRequest) -> ExecutionOutcome:
        invocation = self.build(context_name, target, mode, request)
        logger.debug(f"Launching: {invocation.argv!r}")
        return self.run(invocation, target)


class InlineStrategy(ExecutionStrategy):

    def run(self, invocation: Invocation, target: TargetObject) -> ExecutionOutcome:
        try:
            # No stream redirection: the child inherits the session's terminal
            returncode = subprocess.call(list(invocation.argv))
        except (OSError, ValueError) as e:
            return ExecutionOutcome.failure(classify_launch_error(e, invocation.program))

        if returncode != 0:
            logger.debug(f"{invocation.program} on {target.name} returned {returncode}")
            return ExecutionOutcome.failure(AbnormalExitError())
        return ExecutionOutcome.success()


class TerminalStrategy(ExecutionStrategy):
    """
    Opens one terminal per object. `launcher` is the terminal command as
    typed by the user (e.g. "gnome-terminal --"); None means the default.
    """

    in_terminal = True

    def __init__(self, launcher: Optional[str] = None, console: Optional[Console] = None):
        super().__init__(console)
        self._launcher = launcher

    @property
    def launcher(self) -> Optional[str]:
        return self._launcher

    def run(self, invocation: Invocation, target: TargetObject) -> ExecutionOutcome:
        self.console.print(f"Starting on [yellow]{escape(target.name)}[/yellow] in terminal")
        try:
            subprocess.Popen(
                list(invocation.argv),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, ValueError) as e:
            return ExecutionOutcome.failure(classify_launch_error(e, invocation.program))
        return ExecutionOutcome.success()


def choose_strategy(request: ExecRequest, default_terminal: Optional[str] = None,
                    console: Optional[Console] = None) -> ExecutionStrategy:
    """
    Picks the strategy for the whole call. An explicit --terminal value
    wins over the configured default terminal.
    """
    if not request.in_terminal:
        return InlineStrategy(console)
    return TerminalStrategy(request.terminal or default_terminal, console)
