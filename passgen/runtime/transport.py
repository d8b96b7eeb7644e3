"""Blocking UDP socket wrapper.

Each call moves exactly one datagram. Socket errors surface as
TransportFailure; a receive timeout is marked transient.
"""

from __future__ import annotations

import socket
from typing import Optional, Tuple

from passgen.protocol.errors import TransportFailure


Address = Tuple[str, int]


class UdpTransport:
    def __init__(self, timeout: Optional[float] = None) -> None:
        try:
            self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        except OSError as exc:
            raise TransportFailure("socket_failed", f"could not create socket: {exc}") from exc
        self.sock.settimeout(timeout)
        self.closed = False

    def __enter__(self) -> "UdpTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def local_address(self) -> Address:
        return self.sock.getsockname()

    def bind(self, address: Address) -> None:
        try:
            self.sock.bind(address)
        except OSError as exc:
            raise TransportFailure("bind_failed", f"bind to {address[0]}:{address[1]} failed: {exc}") from exc

    def resolve(self, address: Address) -> Address:
        """Map a host name to the IPv4 address replies will come from."""
        host, port = address
        try:
            return (socket.gethostbyname(host), port)
        except OSError as exc:
            raise TransportFailure("resolve_failed", f"cannot resolve {host}: {exc}") from exc

    def drain(self, size: int) -> int:
        """Discard datagrams already queued on the socket; return how many."""
        try:
            _, port = self.sock.getsockname()
        except OSError:
            port = 0
        if port == 0:
            # Nothing can be queued before the first send binds the socket.
            return 0
        dropped = 0
        timeout = self.sock.gettimeout()
        self.sock.setblocking(False)
        try:
            while True:
                try:
                    self.sock.recvfrom(size)
                except BlockingIOError:
                    return dropped
                except OSError as exc:
                    raise TransportFailure("receive_failed", f"receive failed: {exc}") from exc
                dropped += 1
        finally:
            self.sock.settimeout(timeout)

    def send_to(self, payload: bytes, address: Address) -> None:
        try:
            sent = self.sock.sendto(payload, address)
        except socket.gaierror as exc:
            raise TransportFailure("resolve_failed", f"cannot resolve {address[0]}: {exc}") from exc
        except OSError as exc:
            raise TransportFailure("send_failed", f"send failed: {exc}") from exc
        if sent != len(payload):
            raise TransportFailure("send_failed", f"sent {sent} of {len(payload)} bytes")

    def recv_from(self, size: int) -> Tuple[bytes, Address]:
        try:
            return self.sock.recvfrom(size)
        except socket.timeout as exc:
            raise TransportFailure("timeout", "no datagram before timeout", transient=True) from exc
        except OSError as exc:
            raise TransportFailure("receive_failed", f"receive failed: {exc}") from exc

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.sock.close()
