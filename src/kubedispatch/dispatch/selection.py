#!/usr/bin/env python3
"""
KUBEDISPATCH SELECTION DISPATCHER
---------------------------------
Applies a per-object operation across the current selection, in order.
A failing object is recorded and reported, and the loop moves on; the
batch only stops early when the operation raises something that is not
a DispatchError.

Author: KubeDispatch Team
Date: 2026-10-18
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape

from kubedispatch.core.errors import DispatchError
from kubedispatch.core.models import ExecutionOutcome, TargetObject

logger = logging.getLogger("kubedispatch.dispatch")

DEFAULT_SEPARATOR = "--- {name} ---"

Operation = Callable[[TargetObject], ExecutionOutcome]
Gate = Callable[[TargetObject], Optional[DispatchError]]


@dataclass
class DispatchReport:
    """Every (object, outcome) pair produced by one dispatch, in selection order."""
    results: List[Tuple[TargetObject, ExecutionOutcome]] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.results)

    @property
    def failures(self) -> List[Tuple[TargetObject, ExecutionOutcome]]:
        return [(obj, outcome) for obj, outcome in self.results if not outcome.ok]

    @property
    def ok(self) -> bool:
        return not self.failures

    def first_error(self) -> Optional[DispatchError]:
        failures = self.failures
        return failures[0][1].error if failures else None


def format_separator(template: str, target: TargetObject, index: int) -> str:
    """
    Formats the separator for one object. A template that does not fit
    this object falls back to the default, so the batch keeps going.
    """
    try:
        return _render(template, target, index)
    except (KeyError, IndexError, ValueError, AttributeError) as e:
        logger.warning(f"Separator '{template}' failed for {target.name}: {e}")
        return _render(DEFAULT_SEPARATOR, target, index)


def _render(template: str, target: TargetObject, index: int) -> str:
    return template.format(
        name=target.name,
        namespace=target.namespace or "",
        kind=target.kind,
        index=index,
    )


def apply_to_selection(selection: Sequence[TargetObject], operation: Operation,
                       separator: Optional[str] = DEFAULT_SEPARATOR,
                       gate: Optional[Gate] = None,
                       console: Optional[Console] = None) -> DispatchReport:
    """
    Folds `operation` over `selection`.

    When more than one object is selected, the formatted separator is
    printed ahead of each object's output. `gate` may reject an object
    before the operation runs by returning the error to record for it.
    """
    console = console or Console()
    report = DispatchReport()
    multiple = len(selection) > 1

    for index, target in enumerate(selection):
        if multiple and separator:
            console.print(format_separator(separator, target, index), markup=False, highlight=False)

        rejection = gate(target) if gate else None
        if rejection is not None:
            outcome = ExecutionOutcome.failure(rejection)
        else:
            try:
                outcome = operation(target)
            except DispatchError as e:
                outcome = ExecutionOutcome.failure(e)

        if not outcome.ok:
            logger.warning(f"{target.kind} {target.name}: {outcome.message}")
            console.print(f"[bold red]Error:[/bold red] {escape(outcome.message)}")
        report.results.append((target, outcome))

    return report
