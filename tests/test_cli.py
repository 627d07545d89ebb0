import builtins

import pytest

from pipesh.cli import main


@pytest.fixture(autouse=True)
def no_histfile(monkeypatch):
    monkeypatch.delenv("HISTFILE", raising=False)


def test_cli_exec_outputs(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["exec", "echo hi"])
    assert exc.value.code == 0
    captured = capsys.readouterr()
    assert captured.out == "hi\n"


def test_cli_exec_missing_command(capsys, tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["exec", "--path", str(tmp_path), "doesnotexist123"])
    assert exc.value.code == 127
    assert capsys.readouterr().err == "doesnotexist123: command not found\n"


def test_cli_exec_exit_code():
    with pytest.raises(SystemExit) as exc:
        main(["exec", "exit 7"])
    assert exc.value.code == 7


def test_cli_shell_repl(monkeypatch, capsys):
    inputs = iter(["echo hello", "", "exit 0"])

    def fake_input(_: str) -> str:
        return next(inputs)

    monkeypatch.setattr(builtins, "input", fake_input)
    with pytest.raises(SystemExit) as exc:
        main(["shell"])
    assert exc.value.code == 0
    captured = capsys.readouterr()
    assert "hello" in captured.out


def test_cli_shell_history_round_trip(monkeypatch, capsys, tmp_path):
    histfile = tmp_path / "hist"
    histfile.write_text("echo earlier\n")
    inputs = iter(["echo now", "history"])

    def fake_input(_: str) -> str:
        try:
            return next(inputs)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)
    with pytest.raises(SystemExit) as exc:
        main(["shell", "--histfile", str(histfile)])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "    1  echo earlier\n    2  echo now\n    3  history\n" in out
    assert histfile.read_text() == "echo earlier\necho now\nhistory\n"


def test_cli_shell_reports_errors_and_continues(monkeypatch, capsys, tmp_path):
    inputs = iter(["doesnotexist123", "echo still here", "exit 4"])
    monkeypatch.setattr(builtins, "input", lambda _: next(inputs))
    with pytest.raises(SystemExit) as exc:
        main(["shell", "--path", str(tmp_path)])
    assert exc.value.code == 4
    captured = capsys.readouterr()
    assert "doesnotexist123: command not found" in captured.err
    assert "still here" in captured.out


def test_cli_shell_exit_with_bad_argument_stops(monkeypatch, capsys, tmp_path):
    histfile = tmp_path / "hist"
    inputs = iter(["echo before", "exit abc", "echo after"])
    monkeypatch.setattr(builtins, "input", lambda _: next(inputs))
    with pytest.raises(SystemExit) as exc:
        main(["shell", "--histfile", str(histfile)])
    assert exc.value.code == 2
    captured = capsys.readouterr()
    assert captured.err == "exit: abc: numeric argument required\n"
    assert "after" not in captured.out
    assert histfile.read_text() == "echo before\nexit abc\n"


def test_cli_shell_survives_undecodable_histfile(monkeypatch, capsys, tmp_path):
    histfile = tmp_path / "hist"
    histfile.write_bytes(b"\xff\n")
    inputs = iter(["echo ok", "exit 0"])
    monkeypatch.setattr(builtins, "input", lambda _: next(inputs))
    with pytest.raises(SystemExit) as exc:
        main(["shell", "--histfile", str(histfile)])
    assert exc.value.code == 0
    assert "ok" in capsys.readouterr().out


def test_cli_exec_exit_keeps_histfile(monkeypatch, tmp_path):
    histfile = tmp_path / "hist"
    histfile.write_text("echo earlier\n")
    with pytest.raises(SystemExit) as exc:
        main(["exec", "--histfile", str(histfile), "exit 1"])
    assert exc.value.code == 1
    assert histfile.read_text() == "echo earlier\n"
