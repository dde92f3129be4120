#!/usr/bin/env python3
"""
KUBEDISPATCH FLAG RESOLVER
--------------------------
Turns the tri-state --tty / --stdin inputs into a single AttachMode.

Contrary to kubectl, both flags default to TRUE when absent, so a bare
`exec -- sh` gets an interactive terminal.

Author: KubeDispatch Team
Date: 2026-10-18
"""

from typing import Optional

from kubedispatch.core.errors import FlagValidationError
from kubedispatch.core.models import AttachMode, FlagInput, FlagState

_TRUE_WORDS = ("true",)
_FALSE_WORDS = ("false",)

_MODES = {
    (True, True): AttachMode.INTERACTIVE_TTY,
    (True, False): AttachMode.TTY_ONLY,
    (False, True): AttachMode.STDIN_ONLY,
    (False, False): AttachMode.NONE,
}


def parse_bool(raw: str, flag: str = "flag") -> bool:
    """Parses 'true'/'false' (any case). Anything else is a validation error."""
    text = raw.strip().lower()
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise FlagValidationError(f"Invalid value for {flag}: '{raw}' (expected true or false)")


def flag_input(raw: Optional[str], present: bool, flag: str = "flag") -> FlagInput:
    """
    Builds a FlagInput at the parsing boundary.
    present=False -> absent, raw=None -> present without value.
    """
    if not present:
        return FlagInput.absent()
    if raw is None:
        return FlagInput.present()
    return FlagInput.explicit(parse_bool(raw, flag))


def effective_value(flag: FlagInput) -> bool:
    if flag.state is FlagState.EXPLICIT:
        return bool(flag.value)
    # Absent and present-without-value both mean true
    return True


def resolve_attach_mode(tty: FlagInput, stdin: FlagInput) -> AttachMode:
    return _MODES[(effective_value(tty), effective_value(stdin))]
