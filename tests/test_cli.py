from __future__ import annotations

import threading
import time

import pytest

from passgen.main import main
from passgen.runtime.transport import UdpTransport


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    for key in ("HOST", "PORT", "TIMEOUT", "SEED", "CONFIG"):
        monkeypatch.delenv(f"PASSGEN_{key}", raising=False)
    monkeypatch.chdir(tmp_path)


def test_generate_is_reproducible_with_seed(capsys):
    assert main(["generate", "--seed", "9", "s", "16"]) == 0
    first = capsys.readouterr().out.strip()
    assert main(["generate", "--seed", "9", "s", "16"]) == 0
    second = capsys.readouterr().out.strip()
    assert first == second
    assert len(first) == 16


def test_generate_uses_default_length(capsys):
    assert main(["generate", "n"]) == 0
    password = capsys.readouterr().out.strip()
    assert len(password) == 8
    assert password.isdigit()


@pytest.mark.parametrize("args", [["generate", "x", "8"], ["generate", "n", "40"], ["generate", "n", "abc"]])
def test_generate_refuses_invalid_input(capsys, args):
    assert main(args) == 1
    assert "Invalid" in capsys.readouterr().out


def test_invalid_settings_exit_with_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", "--port", "99999", "n"])
    assert excinfo.value.code == 2


def test_serve_and_request_over_loopback(capsys):
    with UdpTransport() as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.local_address[1]

    server = threading.Thread(
        target=main,
        args=(["serve", "--port", str(port), "--timeout", "0.05", "--max-requests", "1"],),
        daemon=True,
    )
    server.start()

    exit_code = 1
    for _ in range(20):
        exit_code = main(["request", "--port", str(port), "--timeout", "0.25", "u", "12"])
        if exit_code == 0:
            break
        time.sleep(0.05)
    server.join(timeout=5)

    assert exit_code == 0
    lines = capsys.readouterr().out.splitlines()
    assert any(len(line) == 12 for line in lines)


def test_request_reports_timeout_without_server(capsys):
    with UdpTransport() as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.local_address[1]
    assert main(["request", "--port", str(port), "--timeout", "0.05", "n"]) == 1
    assert capsys.readouterr().out.strip()
