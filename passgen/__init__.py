"""Password generation over a single-datagram UDP exchange."""

__version__ = "1.0.1"
