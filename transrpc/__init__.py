"""Client for the Transmission-style JSON-over-HTTP RPC dialect.

Components:
- TagAllocator: thread-safe correlation tag counter
- SessionClient: token-aware delivery, tagging and response validation
- protocol: request/response envelopes and their JSON codec
"""

from transrpc.client import (
    DEFAULT_ENDPOINT,
    DEFAULT_TRIES,
    SESSION_HEADER,
    Attempt,
    AttemptOutcome,
    SessionClient,
)
from transrpc.errors import (
    DeserializationError,
    ResponseError,
    RetriesExhaustedError,
    RPCError,
    SerializationError,
    TagMismatchError,
    TransportError,
    UnsuccessfulResponseError,
)
from transrpc.protocol import SUCCESS, RequestEnvelope, ResponseEnvelope
from transrpc.tags import TagAllocator

__all__ = [
    "DEFAULT_ENDPOINT",
    "DEFAULT_TRIES",
    "SESSION_HEADER",
    "SUCCESS",
    "Attempt",
    "AttemptOutcome",
    "SessionClient",
    "TagAllocator",
    "RequestEnvelope",
    "ResponseEnvelope",
    "RPCError",
    "TransportError",
    "RetriesExhaustedError",
    "SerializationError",
    "DeserializationError",
    "ResponseError",
    "TagMismatchError",
    "UnsuccessfulResponseError",
]
