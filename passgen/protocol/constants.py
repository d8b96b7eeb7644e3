"""Fixed sizes and defaults shared by both ends of the exchange."""

BUFFER_SIZE = 1024
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 32
PASSWORD_FIELD_SIZE = MAX_PASSWORD_LENGTH + 1

REQUEST_SIZE = 1 + BUFFER_SIZE
RESPONSE_SIZE = PASSWORD_FIELD_SIZE

TERMINATOR = b"\x00"

DEFAULT_LENGTH = "8"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
