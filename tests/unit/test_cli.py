from __future__ import annotations

import logging
import sys

import pytest

from fuzzback import cli
from fuzzback.models import SessionState
from fuzzback.tmux import TmuxError


class CliTmux:
    version_output = "tmux 3.4"
    options: dict[str, str] = {}
    fail = False

    def __init__(self, target=None) -> None:
        self.target = target

    def version(self) -> str:
        self.logger_propagates = logging.getLogger("fuzzback").propagate
        if self.fail:
            raise TmuxError("no server running")
        return self.version_output

    def show_options(self) -> dict[str, str]:
        return dict(self.options)


@pytest.fixture()
def patched(monkeypatch: pytest.MonkeyPatch, tmp_config_dir, fuzzback_logger):
    calls: dict = {"run": [], "picker_config": None}

    class Tmux(CliTmux):
        pass

    def fake_run(tmux, picker):
        calls["run"].append((tmux, picker))
        return SessionState.NAVIGATED

    def fake_get_picker(config):
        calls["picker_config"] = dict(config)
        return "picker"

    monkeypatch.setattr("fuzzback.tmux.Tmux", Tmux)
    monkeypatch.setattr("fuzzback.session.run_fuzzback", fake_run)
    monkeypatch.setattr("fuzzback.picker.get_picker", fake_get_picker)
    calls["tmux_cls"] = Tmux
    return calls


def test_main_runs_session_for_target(monkeypatch, patched) -> None:
    monkeypatch.setattr(sys, "argv", ["fuzzback", "--target", "%5"])

    assert cli.main() == 0
    tmux, picker = patched["run"][0]
    assert tmux.target == "%5"
    assert picker == "picker"


def test_picker_flag_overrides_config(monkeypatch, patched) -> None:
    patched["tmux_cls"].options = {"@fuzzback-picker": "fzf"}
    monkeypatch.setattr(sys, "argv", ["fuzzback", "--picker", "textual"])

    cli.main()
    assert patched["picker_config"]["picker"] == "textual"


def test_tmux_options_reach_picker_config(monkeypatch, patched) -> None:
    patched["tmux_cls"].options = {"@fuzzback-popup": "1"}
    monkeypatch.setattr(sys, "argv", ["fuzzback"])

    cli.main()
    assert patched["picker_config"]["popup"] is True


def test_unsupported_tmux_is_silent_noop(monkeypatch, patched, capsys) -> None:
    patched["tmux_cls"].version_output = "tmux 2.1"
    monkeypatch.setattr(sys, "argv", ["fuzzback"])

    assert cli.main() == 0
    assert patched["run"] == []
    assert capsys.readouterr() == ("", "")


def test_missing_tmux_server_is_silent_noop(monkeypatch, patched, capsys) -> None:
    patched["tmux_cls"].fail = True
    monkeypatch.setattr(sys, "argv", ["fuzzback"])

    assert cli.main() == 0
    assert patched["run"] == []
    assert capsys.readouterr() == ("", "")


def test_session_error_is_logged_not_printed(monkeypatch, patched, capsys) -> None:
    def failing_run(tmux, picker):
        raise TmuxError("send-keys failed")

    monkeypatch.setattr("fuzzback.session.run_fuzzback", failing_run)
    monkeypatch.setattr(sys, "argv", ["fuzzback"])

    assert cli.main() == 0
    assert capsys.readouterr() == ("", "")


def test_version_flag(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["fuzzback", "--version"])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 0
    assert capsys.readouterr().out.startswith("fuzzback ")


def test_invalid_picker_is_rejected(monkeypatch) -> None:
    monkeypatch.setattr(sys, "argv", ["fuzzback", "--picker", "skim"])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 2


def test_logger_is_silenced_before_first_tmux_call(monkeypatch, patched) -> None:
    created = []

    class Tmux(CliTmux):
        def __init__(self, target=None) -> None:
            super().__init__(target)
            created.append(self)

    monkeypatch.setattr("fuzzback.tmux.Tmux", Tmux)
    monkeypatch.setattr(sys, "argv", ["fuzzback"])

    cli.main()
    assert created[0].logger_propagates is False
