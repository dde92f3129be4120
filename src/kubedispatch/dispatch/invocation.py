#!/usr/bin/env python3
"""
KUBEDISPATCH INVOCATION BUILDER
-------------------------------
Assembles the argv for `kubectl exec` against one pod, either to be run
directly or handed to a terminal launcher as trailing arguments.

Every argument stays a discrete token. Remote command words are appended
in the order given and are never joined into one string.

Author: KubeDispatch Team
Date: 2026-10-18
"""

from typing import List, Optional, Sequence

from kubedispatch.core.models import AttachMode, Invocation, TargetObject

KUBECTL = "kubectl"
DEFAULT_TERMINAL = "xterm -e"


def kubectl_args(context_name: str, target: TargetObject, mode: AttachMode,
                 command: Sequence[str], container: Optional[str] = None) -> List[str]:
    """
    Base form of the exec command line, program name included:

        kubectl --namespace NS --context CTX exec [MODE] POD [-c C] -- CMD...
    """
    if not target.namespace:
        raise ValueError(f"Object '{target.name}' reached the invocation builder without a namespace")

    argv = [KUBECTL, "--namespace", target.namespace, "--context", context_name, "exec"]
    if mode.token:
        argv.append(mode.token)
    argv.append(target.name)
    if container is not None:
        argv.extend(["-c", container])
    argv.append("--")
    argv.extend(command)
    return argv


def terminal_prefix(launcher: Optional[str]) -> List[str]:
    """Splits the launcher command on whitespace, falling back to the default."""
    words = (launcher or "").split()
    return words or DEFAULT_TERMINAL.split()


def build_invocation(context_name: str, target: TargetObject, mode: AttachMode,
                     command: Sequence[str], container: Optional[str] = None,
                     in_terminal: bool = False, launcher: Optional[str] = None) -> Invocation:
    """
    Produces the Invocation for either strategy. With in_terminal the
    launcher becomes the program and the whole kubectl argv trails it.
    """
    argv = kubectl_args(context_name, target, mode, command, container)
    if in_terminal:
        argv = terminal_prefix(launcher) + argv
    return Invocation(tuple(argv))
