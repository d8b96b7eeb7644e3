from __future__ import annotations

import random
import threading

import pytest

from passgen.runtime.config import Settings
from passgen.runtime.dispatcher import Responder, serve
from passgen.runtime.transport import UdpTransport


class ScriptedTransport:
    """In-memory stand-in for UdpTransport that replays queued datagrams."""

    def __init__(self, incoming=None, stale=None):
        self.incoming = list(incoming or [])
        self.stale = list(stale or [])
        self.sent = []

    def resolve(self, address):
        return address

    def drain(self, size):
        dropped = len(self.stale)
        self.stale.clear()
        return dropped

    def send_to(self, payload, address):
        self.sent.append((payload, address))

    def recv_from(self, size):
        item = self.incoming.pop(0)
        if isinstance(item, Exception):
            raise item
        data, peer = item
        return data[:size], peer


@pytest.fixture
def udp_server():
    """Seeded responder on an ephemeral loopback port; yields its address."""
    transport = UdpTransport(timeout=0.05)
    transport.bind(("127.0.0.1", 0))
    responder = Responder(rng=random.Random(2024), settings=Settings())
    stop = threading.Event()
    thread = threading.Thread(
        target=serve,
        args=(transport, responder),
        kwargs={"stop_event": stop},
        daemon=True,
    )
    thread.start()
    yield transport.local_address
    stop.set()
    thread.join(timeout=2)
    transport.close()


@pytest.fixture
def scripted_transport():
    return ScriptedTransport
