"""Console programs for the sender and the receiver."""

from __future__ import annotations

import argparse
import logging
import random
import threading
from typing import Callable

from .models.generator import GeneratorCode, parse_payload, payload_bits
from .protocol.errors import ChannelError, InvalidFormatError
from .server import serve
from .transport.channel import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT_S, McpChannel
from .transport.receiver import ReceiverSession
from .transport.sender import Sender, TransmitReport, TransmitStatus
from .utils.crc import encode

Reader = Callable[[str], str]

SERVER_STARTUP_S = 1.0


def prompt_code(read: Reader = input) -> GeneratorCode:
    """Ask for a generator code until a valid one is entered."""
    while True:
        try:
            return GeneratorCode.parse(read("CODE: "))
        except InvalidFormatError as e:
            print(f"ERROR: {e}")


def prompt_payload(read: Reader = input) -> int:
    """Ask for a payload until valid binary digits are entered."""
    while True:
        try:
            return parse_payload(read("DATA: "))
        except InvalidFormatError as e:
            print(f"ERROR: {e}")


def random_error_mask(payload: int) -> int:
    """Pick one bit of the payload to flip."""
    return 1 << random.randrange(len(payload_bits(payload)))


def describe(report: TransmitReport, code: GeneratorCode) -> str:
    if report.status is TransmitStatus.DELIVERED:
        return f"SUCCESS: delivered after {report.attempts} attempt(s)"
    if report.status is TransmitStatus.EXHAUSTED:
        return f"ERROR: receiver rejected all {report.attempts} attempts, giving up"
    return f"ERROR: receiver has no code configured (sender code: {code})"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--code", help="generator code as binary digits")
    parser.add_argument("-v", "--verbose", action="store_true")


def run_sender(sender: Sender, payload: int, read: Reader = input) -> int:
    """Interactive sender menu; returns when the user quits."""
    while True:
        print("\n1. send data\n2. send data with a bit error\n3. re-enter code/data\n0. quit")
        choice = read("MENU: ").strip()
        if choice == "0":
            return 0
        if choice == "3":
            sender.configure(prompt_code(read))
            payload = prompt_payload(read)
            continue
        if choice not in ("1", "2"):
            print("ERROR: choose 0, 1, 2 or 3")
            continue

        mask = random_error_mask(payload) if choice == "2" else 0
        print(f"CHECKSUM: {encode(payload, sender.code)}")
        try:
            report = sender.transmit(payload, error_mask=mask)
        except ChannelError as e:
            print(f"ERROR: receiver unreachable ({e})")
            continue
        for frame in report.frames:
            print(f"SENT: {frame}")
        print(describe(report, sender.code))


def sender_main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="checksum-sender", description="Send CRC-protected data to a receiver."
    )
    _add_common(p)
    p.add_argument("--data", help="payload as binary digits")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_S)
    args = p.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        code = GeneratorCode.parse(args.code) if args.code else prompt_code()
        payload = parse_payload(args.data) if args.data else prompt_payload()
    except InvalidFormatError as e:
        p.error(str(e))

    channel = McpChannel(args.host, args.port, timeout_s=args.timeout)
    return run_sender(Sender(channel, code), payload)


def run_receiver(session: ReceiverSession, read: Reader = input) -> int:
    """Interactive receiver menu; returns when the user quits."""
    while True:
        print("\n1. re-enter code\n0. quit")
        choice = read("MENU: ").strip()
        if choice == "0":
            return 0
        if choice == "1":
            session.configure(prompt_code(read))
        else:
            print("ERROR: choose 0 or 1")


def receiver_main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="checksum-receiver", description="Verify CRC-protected data from a sender."
    )
    _add_common(p)
    args = p.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        code = GeneratorCode.parse(args.code) if args.code else None
    except InvalidFormatError as e:
        p.error(str(e))

    session = ReceiverSession(code)
    thread = threading.Thread(
        target=serve, args=(session, args.host, args.port), daemon=True
    )
    thread.start()
    # A bind failure ends the server thread during startup.
    thread.join(SERVER_STARTUP_S)
    if not thread.is_alive():
        print(f"ERROR: receiver server on {args.host}:{args.port} failed to start")
        return 1
    if not session.configured:
        session.configure(prompt_code())
    return run_receiver(session)
