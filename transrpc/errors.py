"""Error kinds raised by the RPC client.

Each failure mode has its own class so callers can tell them apart. Errors
raised after a response was parsed carry that response on `.response`.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from transrpc.protocol import ResponseEnvelope  # pragma: no cover


class RPCError(Exception):
    """Base class for every error raised by transrpc."""


class TransportError(RPCError):
    """The HTTP exchange could not be performed at all."""


class RetriesExhaustedError(RPCError):
    """No attempt produced a usable response body."""

    def __init__(self, tries: int):
        super().__init__(f"Gave up after {tries} tries")
        self.tries = tries


class SerializationError(RPCError):
    """The request envelope could not be encoded."""


class DeserializationError(RPCError):
    """The response body is not a valid response envelope."""


class ResponseError(RPCError):
    """A parsed response failed validation."""

    def __init__(self, message: str, response: "ResponseEnvelope"):
        super().__init__(message)
        self.response = response


class TagMismatchError(ResponseError):
    def __init__(self, response: "ResponseEnvelope", expected: int):
        super().__init__(f"Tag mismatch ({response.tag} != {expected})", response)
        self.expected = expected
        self.received = response.tag


class UnsuccessfulResponseError(ResponseError):
    def __init__(self, response: "ResponseEnvelope"):
        super().__init__(f"Unsuccessful response: {response.result}", response)
        self.result = response.result
