"""Tests for the console programs."""

from unittest.mock import patch

import pytest

from checksum_link import cli
from checksum_link.models.generator import GeneratorCode
from checksum_link.transport.channel import LoopbackChannel
from checksum_link.transport.receiver import ReceiverSession
from checksum_link.transport.sender import Sender


def _reader(*lines):
    it = iter(lines)
    return lambda prompt: next(it)


def test_prompt_code_reprompts(capsys):
    """Invalid codes are reported and asked for again."""
    code = cli.prompt_code(_reader("12", "0", "1001"))
    assert code == GeneratorCode.parse("1001")
    assert capsys.readouterr().out.count("ERROR") == 2


def test_prompt_payload_reprompts(capsys):
    assert cli.prompt_payload(_reader("xyz", "", "0")) == 0
    assert capsys.readouterr().out.count("ERROR") == 2


def test_random_error_mask_flips_one_payload_bit():
    for _ in range(50):
        mask = cli.random_error_mask(0b1101)
        assert mask in (1, 2, 4, 8)


def test_run_sender_sends_and_quits(capsys):
    session = ReceiverSession(GeneratorCode.parse("1001"))
    sender = Sender(LoopbackChannel(session), GeneratorCode.parse("1001"))

    assert cli.run_sender(sender, 13, _reader("1", "0")) == 0

    out = capsys.readouterr().out
    assert "CHECKSUM: 100" in out
    assert "SENT: 1101100" in out
    assert "SUCCESS" in out


def test_run_sender_error_then_retry(capsys):
    session = ReceiverSession(GeneratorCode.parse("1001"))
    sender = Sender(LoopbackChannel(session), GeneratorCode.parse("1001"))

    with patch.object(cli, "random_error_mask", return_value=0b0010):
        cli.run_sender(sender, 13, _reader("2", "0"))

    out = capsys.readouterr().out
    assert "SENT: 1111100" in out
    assert "SENT: 1101100" in out
    assert "after 2 attempt(s)" in out


def test_run_sender_reenter(capsys):
    session = ReceiverSession(GeneratorCode.parse("1011"))
    sender = Sender(LoopbackChannel(session), GeneratorCode.parse("1001"))

    cli.run_sender(sender, 13, _reader("3", "1011", "1", "1", "0"))

    assert sender.code.bits == "1011"
    assert "SENT: 1011" in capsys.readouterr().out


def test_run_sender_reports_code_error(capsys):
    sender = Sender(LoopbackChannel(ReceiverSession()), GeneratorCode.parse("1001"))
    cli.run_sender(sender, 13, _reader("1", "0"))
    assert "no code configured" in capsys.readouterr().out


def test_run_receiver_reconfigures():
    session = ReceiverSession(GeneratorCode.parse("1001"))
    assert cli.run_receiver(session, _reader("7", "1", "1011", "0")) == 0
    assert session.snapshot().bits == "1011"


def test_sender_main_rejects_bad_code():
    with pytest.raises(SystemExit):
        cli.sender_main(["--code", "12", "--data", "1"])


def test_sender_main_builds_channel():
    with patch.object(cli, "run_sender", return_value=0) as run, \
            patch.object(cli, "McpChannel") as channel_cls:
        assert cli.sender_main(
            ["--code", "1001", "--data", "1101", "--port", "9000", "--timeout", "2"]
        ) == 0

    channel_cls.assert_called_once_with("127.0.0.1", 9000, timeout_s=2.0)
    sender, payload = run.call_args.args
    assert payload == 13
    assert sender.code.bits == "1001"


def test_receiver_main_starts_server():
    with patch.object(cli, "run_receiver", return_value=0) as run, \
            patch.object(cli.threading, "Thread") as thread_cls:
        assert cli.receiver_main(["--code", "1001", "--port", "9001"]) == 0

    session = run.call_args.args[0]
    assert session.snapshot().bits == "1001"
    thread_cls.assert_called_once_with(
        target=cli.serve, args=(session, "127.0.0.1", 9001), daemon=True
    )
    thread_cls.return_value.start.assert_called_once()
    thread_cls.return_value.join.assert_called_once_with(cli.SERVER_STARTUP_S)


def test_receiver_main_stops_when_server_dies(capsys):
    """A server that exits during startup (e.g. port in use) ends the program."""
    with patch.object(cli, "run_receiver") as run, \
            patch.object(cli.threading, "Thread") as thread_cls:
        thread_cls.return_value.is_alive.return_value = False
        assert cli.receiver_main(["--code", "1001", "--port", "9002"]) == 1

    thread_cls.return_value.join.assert_called_once_with(cli.SERVER_STARTUP_S)
    run.assert_not_called()
    assert "failed to start" in capsys.readouterr().out
