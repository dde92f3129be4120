#!/usr/bin/env python3
"""
KUBEDISPATCH CLI
----------------
Command-line surface for the exec dispatcher:

    kubedispatch exec -o ns/pod-a -o ns/pod-b [-c CONTAINER] [-t [TERM]]
                      [-T [BOOL]] [-i [BOOL]] -- COMMAND...
    kubedispatch set terminal "gnome-terminal --"

Author: KubeDispatch Team
Date: 2026-10-18
"""

import os
import sys
import logging
import argparse
from typing import List, Optional

from rich.console import Console

from kubedispatch.cli.formatter import DispatchFormatter
from kubedispatch.core.config import KNOWN_KEYS, load_config, set_config_value
from kubedispatch.core.errors import DispatchError, FlagValidationError
from kubedispatch.core.kubeconfig import resolve_context
from kubedispatch.core.models import ExecRequest, FlagInput, TargetObject
from kubedispatch.dispatch.flags import flag_input
from kubedispatch.dispatch.pipeline import run_exec

VERSION = "kubedispatch v0.1.0"
LOG_LEVEL_ENV = "KUBEDISPATCH_LOG_LEVEL"

# Global console for consistent styling across the application
console = Console()
logger = logging.getLogger("kubedispatch.cli")


def parse_target(raw: str) -> TargetObject:
    """[KIND/]NAMESPACE/NAME, or a bare NAME with no namespace."""
    parts = raw.split("/")
    if any(not p for p in parts) or len(parts) > 3:
        raise argparse.ArgumentTypeError(f"invalid object '{raw}', expected [KIND/]NAMESPACE/NAME")
    if len(parts) == 1:
        return TargetObject(name=parts[0])
    if len(parts) == 2:
        return TargetObject(name=parts[1], namespace=parts[0])
    return TargetObject(name=parts[2], namespace=parts[1], kind=parts[0].lower())


def log_level(debug: bool = False) -> str:
    """--debug, then $KUBEDISPATCH_LOG_LEVEL. Unknown names fall back to WARNING."""
    if debug:
        return "DEBUG"
    level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        return "WARNING"
    return level


def _bool_flag(flag: str):
    def convert(raw: str) -> FlagInput:
        try:
            return flag_input(raw, True, flag)
        except FlagValidationError as e:
            raise argparse.ArgumentTypeError(str(e))
    convert.__name__ = "bool"
    return convert


class KubeDispatchCLI:
    """Translates command lines into dispatcher calls and renders the result."""

    def __init__(self, console: Console = console):
        self.console = console
        self.formatter = DispatchFormatter(console)
        self.parser = argparse.ArgumentParser(
            prog="kubedispatch",
            description="KubeDispatch - run kubectl exec across a selection of pods",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("--version", action="version", version=VERSION)
        self.parser.add_argument("--config", help="Path to the config file (default: ~/.kubedispatch/config.yaml)")
        self.parser.add_argument("--context", help="Cluster context to use (default: config, then kubeconfig)")
        self.parser.add_argument("--debug", action="store_true", help="Enable debug logging")

        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        exec_parser = subparsers.add_parser("exec", help="Exec specified command on the selected pods")
        exec_parser.add_argument(
            "-o", "--object", dest="objects", action="append", type=parse_target,
            metavar="[KIND/]NS/NAME", help="Object to act on; repeat to select a range"
        )
        exec_parser.add_argument("-c", "--container", help="Exec in the specified container")
        exec_parser.add_argument(
            "-t", "--terminal", nargs="?", const="", default=None, metavar="TERMINAL",
            help="Run the command in a new terminal. With --terminal ARG, ARG is used as the "
                 "terminal command, otherwise the default is used ('set terminal <value>' to "
                 "specify default). If a range of objects is selected, a new terminal is opened "
                 "for each object."
        )
        exec_parser.add_argument(
            "-T", "--tty", nargs="?", const=FlagInput.present(), default=FlagInput.absent(),
            type=_bool_flag("--tty"), metavar="BOOL",
            help="If stdin is a TTY. Contrary to kubectl, this defaults to TRUE"
        )
        exec_parser.add_argument(
            "-i", "--stdin", nargs="?", const=FlagInput.present(), default=FlagInput.absent(),
            type=_bool_flag("--stdin"), metavar="BOOL",
            help="Pass stdin to the container. Contrary to kubectl, this defaults to TRUE"
        )
        exec_parser.add_argument("remote", nargs="+", metavar="COMMAND",
                                 help="The command to execute (put it after --)")

        set_parser = subparsers.add_parser("set", help="Persist a configuration value")
        set_parser.add_argument("key", choices=KNOWN_KEYS)
        set_parser.add_argument("value")

    def _setup_logging(self, debug: bool):
        logging.basicConfig(
            level=log_level(debug),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    def _run_exec(self, args: argparse.Namespace) -> int:
        config = load_config(args.config)
        context = resolve_context(args.context, config)
        request = ExecRequest(
            command=list(args.remote),
            container=args.container,
            terminal=args.terminal,
            tty=args.tty,
            stdin=args.stdin,
        )

        selection = args.objects or []
        if not selection:
            self.formatter.print_notice("No objects selected, nothing to do.")

        report = run_exec(context, selection, request, config=config, console=self.console)
        self.formatter.print_report(report)
        return 0 if report.ok else 1

    def _run_set(self, args: argparse.Namespace) -> int:
        path = set_config_value(args.key, args.value, args.config)
        self.console.print(f"Set [cyan]{args.key}[/cyan] in {path}")
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point. Returns the process exit status."""
        args = self.parser.parse_args(argv)
        self._setup_logging(args.debug)

        try:
            if args.command == "exec":
                return self._run_exec(args)
            if args.command == "set":
                return self._run_set(args)
        except DispatchError as e:
            logger.debug(f"{type(e).__name__}: {e}")
            self.formatter.print_error(e)
            return 1

        self.parser.print_help()
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(KubeDispatchCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
