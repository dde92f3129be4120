import io
import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest
from rich.console import Console
from kubedispatch.core.errors import AbnormalExitError, PreconditionError
from kubedispatch.core.models import ExecutionOutcome, TargetObject
from kubedispatch.dispatch.selection import apply_to_selection, format_separator


def quiet_console():
    return Console(file=io.StringIO(), width=200)


class RecordingOperation:
    def __init__(self, fail_on=()):
        self.seen = []
        self.fail_on = set(fail_on)

    def __call__(self, target):
        self.seen.append(target.name)
        if target.name in self.fail_on:
            return ExecutionOutcome.failure(AbnormalExitError())
        return ExecutionOutcome.success()


def pods(*names):
    return [TargetObject(name=n, namespace="ns1") for n in names]


def only_pods(target):
    return None if target.is_pod() else PreconditionError("Exec only possible on pods")


def test_empty_selection_does_nothing():
    console = quiet_console()
    op = RecordingOperation()
    report = apply_to_selection([], op, separator="=== {name} ===", console=console)

    assert op.seen == []
    assert report.attempted == 0
    assert report.ok
    assert console.file.getvalue() == ""


def test_single_object_has_no_separator():
    console = quiet_console()
    report = apply_to_selection(pods("a"), RecordingOperation(), separator="=== {name} ===", console=console)
    assert report.ok
    assert "===" not in console.file.getvalue()


def test_separator_precedes_each_object_of_a_range():
    console = quiet_console()
    apply_to_selection(pods("a", "b", "c"), RecordingOperation(),
                       separator="=== {name} [{index}] ===", console=console)
    lines = console.file.getvalue().splitlines()
    assert lines == ["=== a [0] ===", "=== b [1] ===", "=== c [2] ==="]


def test_ineligible_object_does_not_stop_the_batch():
    """
    BATCH TEST: The middle object is not a pod. It fails on its own,
    the others are still attempted.
    """
    selection = [
        TargetObject(name="a", namespace="ns1"),
        TargetObject(name="svc", namespace="ns1", kind="service"),
        TargetObject(name="c", namespace="ns1"),
    ]
    op = RecordingOperation()
    report = apply_to_selection(selection, op, gate=only_pods, console=quiet_console())

    assert op.seen == ["a", "c"]
    assert report.attempted == 3
    assert not report.ok
    failed_target, outcome = report.failures[0]
    assert failed_target.name == "svc"
    assert outcome.message == "Exec only possible on pods"


def test_every_failure_is_surfaced():
    console = quiet_console()
    op = RecordingOperation(fail_on={"a", "c"})
    report = apply_to_selection(pods("a", "b", "c"), op, console=console)

    assert op.seen == ["a", "b", "c"]
    assert [t.name for t, _ in report.failures] == ["a", "c"]
    assert report.first_error().message == "kubectl exited abnormally"
    assert console.file.getvalue().count("kubectl exited abnormally") == 2


def test_raised_dispatch_error_is_recorded_per_object():
    def explode(target):
        raise PreconditionError(f"cannot handle {target.name}")

    report = apply_to_selection(pods("a", "b"), explode, console=quiet_console())
    assert [o.message for _, o in report.results] == ["cannot handle a", "cannot handle b"]


def test_unexpected_exception_stops_the_batch():
    def broken(target):
        raise RuntimeError("bug")

    with pytest.raises(RuntimeError):
        apply_to_selection(pods("a", "b"), broken, console=quiet_console())


def test_format_separator_fields():
    target = TargetObject(name="web-0", namespace="ns1")
    assert format_separator("{kind}:{namespace}/{name}#{index}", target, 4) == "pod:ns1/web-0#4"


def test_separator_that_does_not_fit_an_object_falls_back():
    """
    BATCH TEST: '{name[2]}' works for 'abc' but not for 'a'. The short
    name gets the default separator and every object is still attempted.
    """
    console = quiet_console()
    op = RecordingOperation()
    report = apply_to_selection(pods("abc", "a", "xyz"), op, separator="{name[2]}", console=console)

    assert op.seen == ["abc", "a", "xyz"]
    assert report.ok
    assert console.file.getvalue().splitlines() == ["c", "--- a ---", "z"]


def test_format_separator_falls_back_on_bad_attribute():
    target = TargetObject(name="web-0", namespace="ns1")
    assert format_separator("{name.x}", target, 0) == "--- web-0 ---"
