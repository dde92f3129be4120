#!/usr/bin/env python3
"""
KUBEDISPATCH EXEC PIPELINE
--------------------------
The handler behind `exec`. For each selected object it runs, in order:

1. Flag resolution (tty/stdin -> AttachMode), done once per call
2. Invocation building
3. Execution through the strategy chosen for the call

The cluster context is checked once, before any object is touched.

Author: KubeDispatch Team
Date: 2026-10-18
"""

import logging
from typing import Optional, Sequence

from rich.console import Console

from kubedispatch.core.config import DispatchConfig
from kubedispatch.core.errors import DispatchError, PreconditionError
from kubedispatch.core.models import (
    ClusterContext, ExecRequest, ExecutionOutcome, TargetObject
)
from kubedispatch.dispatch.flags import resolve_attach_mode
from kubedispatch.dispatch.selection import DispatchReport, apply_to_selection
from kubedispatch.dispatch.strategies import ExecutionStrategy, choose_strategy

logger = logging.getLogger("kubedispatch.pipeline")


def exec_gate(target: TargetObject) -> Optional[DispatchError]:
    """Only pods with a namespace can be exec'd into."""
    if not target.is_pod():
        return PreconditionError("Exec only possible on pods")
    if not target.namespace:
        return PreconditionError(f"Pod {target.name} has no namespace")
    return None


class ExecPipeline:
    """
    Composes the per-object steps for one exec call. Built once per call,
    so the attach mode and strategy are shared by every object.
    """

    def __init__(self, context: ClusterContext, request: ExecRequest,
                 strategy: ExecutionStrategy):
        self.context = context
        self.request = request
        self.strategy = strategy
        self.mode = resolve_attach_mode(request.tty, request.stdin)

    def __call__(self, target: TargetObject) -> ExecutionOutcome:
        return self.strategy.execute(self.context.name, target, self.mode, self.request)


def run_exec(context: Optional[ClusterContext], selection: Sequence[TargetObject],
             request: ExecRequest, config: Optional[DispatchConfig] = None,
             console: Optional[Console] = None,
             strategy: Optional[ExecutionStrategy] = None) -> DispatchReport:
    """
    Runs `request` on every object of `selection`.

    Raises PreconditionError when there is no active context. Per-object
    failures never raise; they are in the returned report.
    """
    if context is None:
        raise PreconditionError("Need an active context in order to exec.")

    config = config or DispatchConfig()
    console = console or Console()
    strategy = strategy or choose_strategy(request, config.terminal, console)
    pipeline = ExecPipeline(context, request, strategy)

    logger.debug(
        f"exec on {len(selection)} object(s) in context '{context.name}' "
        f"mode={pipeline.mode.name} strategy={type(strategy).__name__}"
    )
    return apply_to_selection(
        selection,
        pipeline,
        separator=config.range_separator,
        gate=exec_gate,
        console=console,
    )
