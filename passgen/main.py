
"""CLI entrypoint for passgen."""

from __future__ import annotations

import argparse
import logging
from typing import Optional

from passgen.core.generator import generate_password, make_rng
from passgen.core.validation import length_in_range, parse_length, type_allowed
from passgen.protocol.codes import GENERATION_CODES
from passgen.protocol.errors import TransportFailure
from passgen.runtime.client import Requester, run_shell
from passgen.runtime.config import Settings, load_settings
from passgen.runtime.dispatcher import Responder, serve
from passgen.runtime.transport import UdpTransport


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", help="server address (default 127.0.0.1)")
    parser.add_argument("--port", type=int, help="server UDP port (default 8080)")
    parser.add_argument("--timeout", type=float, help="seconds to wait for a datagram")
    parser.add_argument("--seed", type=int, help="seed the generator for reproducible output")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="passgen")
    parser.add_argument("--config", help="path to config.toml")
    parser.add_argument("--log-level", default="WARNING", help="logging level (default WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="answer password requests over UDP")
    _add_common(serve_parser)
    serve_parser.add_argument("--max-requests", type=int, help="stop after this many replies")

    request_parser = subparsers.add_parser("request", help="send one request and print the password")
    _add_common(request_parser)
    request_parser.add_argument("category", help=f"one of {', '.join(GENERATION_CODES)}")
    request_parser.add_argument("length", nargs="?", help="password length")

    shell_parser = subparsers.add_parser("shell", help="interactive requester")
    _add_common(shell_parser)

    generate_parser = subparsers.add_parser("generate", help="generate locally without the network")
    _add_common(generate_parser)
    generate_parser.add_argument("category", help=f"one of {', '.join(GENERATION_CODES)}")
    generate_parser.add_argument("length", nargs="?", help="password length")

    return parser


def _serve(settings: Settings, max_requests: Optional[int]) -> int:
    with UdpTransport(timeout=settings.timeout) as transport:
        transport.bind(settings.address)
        host, port = transport.local_address
        print(f"Server listening on {host}:{port}")
        serve(transport, Responder(settings=settings), max_requests=max_requests)
    return 0


def _request(settings: Settings, category: str, length: str) -> int:
    with UdpTransport(timeout=settings.timeout) as transport:
        outcome = Requester(transport, settings.address, settings).request_password(category, length)
    if not outcome.ok:
        print(outcome.message)
        return 1
    print(outcome.password)
    return 0


def _shell(settings: Settings) -> int:
    with UdpTransport(timeout=settings.timeout) as transport:
        return run_shell(Requester(transport, settings.address, settings))


def _generate(settings: Settings, category: str, length: str) -> int:
    if not type_allowed(GENERATION_CODES, category):
        print("Invalid type. Please choose a valid option.")
        return 1
    if not length_in_range(length, settings.min_length, settings.max_length):
        print(f"Invalid length. Please choose a value between {settings.min_length} and {settings.max_length}.")
        return 1
    value = parse_length(length, max_digits=len(str(settings.max_length)))
    print(generate_password(category, value, make_rng(settings.seed)))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        settings = load_settings(
            args.config,
            host=args.host,
            port=args.port,
            timeout=args.timeout,
            seed=args.seed,
        )
    except ValueError as exc:
        parser.error(str(exc))

    length = getattr(args, "length", None) or str(settings.default_length)
    try:
        if args.command == "serve":
            return _serve(settings, args.max_requests)
        if args.command == "request":
            return _request(settings, args.category, length)
        if args.command == "shell":
            return _shell(settings)
        return _generate(settings, args.category, length)
    except TransportFailure as exc:
        print(f"Transport error: {exc}")
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
