"""JSON envelopes for the RPC dialect.

Request format:
    {
        "method": str,          # Daemon method, e.g. "session-get"
        "arguments": object,    # Method-specific payload, passed through untouched
        "tag": int,             # Correlation id echoed by the daemon
    }

Response format:
    {
        "arguments": object,    # Method-specific result
        "result": str,          # "success" or a failure description
        "tag": int,             # Echo of the request tag
    }

The daemon-side helpers (`deserialize_request`, `serialize_response`) exist
so fake daemons in tests speak exactly the same format.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict

from transrpc.errors import DeserializationError, SerializationError

SUCCESS = "success"


@dataclass(frozen=True)
class RequestEnvelope:
    """One outbound call. Immutable once built."""
    method: str
    arguments: Any
    tag: int


@dataclass
class ResponseEnvelope:
    """One inbound reply, before or after validation."""
    arguments: Dict[str, Any] = field(default_factory=dict)
    result: str = ""
    tag: int = 0

    @property
    def succeeded(self) -> bool:
        return self.result == SUCCESS


def serialize_request(envelope: RequestEnvelope) -> bytes:
    """
    Serialize a request envelope to UTF-8 JSON bytes.

    Raises:
        SerializationError: If the arguments are not JSON-encodable
            (including NaN and infinities)
    """
    request = {
        "method": envelope.method,
        "arguments": envelope.arguments,
        "tag": envelope.tag,
    }
    try:
        return json.dumps(request, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(
            f"Cannot encode request for method '{envelope.method}': {e}"
        ) from e


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def deserialize_response(data: bytes) -> ResponseEnvelope:
    """
    Deserialize a response body into a ResponseEnvelope.

    Missing fields take their zero values. Fields of the wrong type, and
    the non-standard NaN/Infinity literals, are rejected rather than coerced.

    Raises:
        DeserializationError: If the body is not a well-formed envelope
    """
    try:
        payload = json.loads(data.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError) as e:
        raise DeserializationError(f"Response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise DeserializationError(
            f"Response must be a JSON object, got {type(payload).__name__}"
        )

    arguments = payload.get("arguments")
    if arguments is None:
        arguments = {}
    elif not isinstance(arguments, dict):
        raise DeserializationError("Response 'arguments' must be an object")

    result = payload.get("result", "")
    if not isinstance(result, str):
        raise DeserializationError("Response 'result' must be a string")

    tag = payload.get("tag", 0)
    if not _is_int(tag):
        raise DeserializationError("Response 'tag' must be an integer")

    return ResponseEnvelope(arguments=arguments, result=result, tag=tag)


def deserialize_request(data: bytes) -> Dict[str, Any]:
    """
    Deserialize a request body (daemon side).

    Raises:
        json.JSONDecodeError: If data is not valid JSON
    """
    return json.loads(data.decode("utf-8"))


def serialize_response(
    arguments: Any = None,
    result: str = SUCCESS,
    tag: int = 0,
) -> bytes:
    """Serialize a response envelope (daemon side)."""
    response = {
        "arguments": arguments if arguments is not None else {},
        "result": result,
        "tag": tag,
    }
    return json.dumps(response).encode("utf-8")
