import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from kubedispatch.core.config import DispatchConfig
from kubedispatch.core.kubeconfig import current_context, kubeconfig_path, resolve_context
from kubedispatch.core.models import ClusterContext

KUBECONFIG = """\
apiVersion: v1
kind: Config
current-context: kind-dev
contexts:
- name: kind-dev
  context:
    cluster: kind-dev
"""


def test_explicit_context_wins(tmp_path):
    config = DispatchConfig(context="from-config")
    assert resolve_context("from-cli", config) == ClusterContext("from-cli")


def test_config_context_before_kubeconfig(tmp_path, monkeypatch):
    kubeconfig = tmp_path / "kubeconfig"
    kubeconfig.write_text(KUBECONFIG)
    monkeypatch.setenv("KUBECONFIG", str(kubeconfig))
    assert resolve_context(None, DispatchConfig(context="from-config")) == ClusterContext("from-config")


def test_kubeconfig_current_context(tmp_path, monkeypatch):
    kubeconfig = tmp_path / "kubeconfig"
    kubeconfig.write_text(KUBECONFIG)
    monkeypatch.setenv("KUBECONFIG", os.pathsep.join([str(kubeconfig), str(tmp_path / "other")]))
    assert kubeconfig_path() == kubeconfig
    assert resolve_context(None, DispatchConfig()) == ClusterContext("kind-dev")


def test_config_kubeconfig_path_overrides_env(tmp_path, monkeypatch):
    monkeypatch.setenv("KUBECONFIG", str(tmp_path / "ignored"))
    config = DispatchConfig(kubeconfig=str(tmp_path / "chosen"))
    assert kubeconfig_path(config) == tmp_path / "chosen"


def test_no_context_available(tmp_path, monkeypatch):
    monkeypatch.setenv("KUBECONFIG", str(tmp_path / "missing"))
    assert resolve_context(None, DispatchConfig()) is None

    empty = tmp_path / "empty"
    empty.write_text("apiVersion: v1\ncurrent-context: ''\n")
    assert current_context(empty) is None

    broken = tmp_path / "broken"
    broken.write_text("current-context: [unclosed\n")
    assert current_context(broken) is None
