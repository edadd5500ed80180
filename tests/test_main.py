import sys

import pytest

from kubetail import __version__
from kubetail import main as main_module
from kubetail.commands import tail as tail_module
from kubetail.core.config import DEFAULTS
from kubetail.core.errors import KubectlError
from kubetail.tail.lifecycle import LifecycleManager

from conftest import FakeKube


@pytest.fixture(autouse=True)
def no_config(monkeypatch):
    monkeypatch.setattr(main_module.TailConfig, "load", lambda self: dict(DEFAULTS))


def test_no_query_prints_help(capsys):
    assert main_module.main([]) == 1
    assert "usage: kubetail" in capsys.readouterr().out


def test_unknown_option_is_echoed(capsys):
    assert main_module.main(["web", "--bogus"]) == 1
    err = capsys.readouterr().err
    assert "--bogus" in err
    assert "usage:" not in err


def test_invalid_choice(capsys):
    assert main_module.main(["web", "-k", "rainbow"]) == 1
    assert "rainbow" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main_module.main(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_kubectl_failure_exits_one(monkeypatch, capsys):
    def fail(self, selector=None):
        raise KubectlError("kubectl not found in PATH")

    monkeypatch.setattr(main_module.KubeCommand, "get_pods", fail)
    assert main_module.main(["web"]) == 1
    assert "kubectl not found" in capsys.readouterr().err


def test_no_match_exits_one(monkeypatch, capsys):
    monkeypatch.setattr(main_module.KubeCommand, "get_pods", lambda self, selector=None: ["db-0"])
    assert main_module.main(["web"]) == 1
    assert "no pods matched web" in capsys.readouterr().err


def test_dry_run_exits_zero(monkeypatch, capsys):
    monkeypatch.setattr(main_module.KubeCommand, "get_pods", lambda self, selector=None: ["web-1"])
    monkeypatch.setattr(main_module.KubeCommand, "get_containers", lambda self, pod: ["app"])
    assert main_module.main(["web", "--dry-run"]) == 0
    assert capsys.readouterr().out.endswith("Will tail 1 logs...\nweb-1 app\n")


class ClosedPipe:
    """stdout whose reader goes away once the preview has been written"""

    def __init__(self, preview_writes):
        self.preview_writes = preview_writes
        self.written = []

    def write(self, text):
        if len(self.written) >= self.preview_writes:
            raise BrokenPipeError(32, "Broken pipe")
        self.written.append(text)

    def flush(self):
        pass


def test_closed_stdout_stops_streams_quietly(monkeypatch, capsys):
    kube = FakeKube(
        pods={"": ["web-1", "web-2"]},
        containers={"web-1": ["app"], "web-2": ["app"]},
        logs={("web-1", "app"): ["hello"], ("web-2", "app"): ["hello"]},
        sleep=60,
    )
    lifecycles = []

    class RecordingLifecycle(LifecycleManager):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            lifecycles.append(self)

    monkeypatch.setattr(main_module, "KubeCommand", lambda namespace, verbose: kube)
    monkeypatch.setattr(tail_module, "LifecycleManager", RecordingLifecycle)
    # header plus one line per source
    sink = ClosedPipe(preview_writes=3)
    monkeypatch.setattr(sys, "stdout", sink)

    assert main_module.main(["web", "-k", "false"]) == 0

    assert sink.written[0] == "Will tail 2 logs...\n"
    lifecycle, = lifecycles
    assert lifecycle.stopping
    assert len(lifecycle.processes) == 2
    assert all(p.poll() is not None for p in lifecycle.processes)
    assert "Traceback" not in capsys.readouterr().err


def test_unitless_since_from_config_is_an_option_error(monkeypatch, capsys):
    defaults = dict(DEFAULTS, since="10")
    monkeypatch.setattr(main_module.TailConfig, "load", lambda self: defaults)
    monkeypatch.setattr(main_module.KubeCommand, "get_pods", lambda self, selector=None: ["web-1"])
    assert main_module.main(["web"]) == 1
    err = capsys.readouterr().err
    assert "--since" in err
    assert "Command failed" not in err
