"""Session-aware client for the daemon's JSON-over-HTTP RPC endpoint.

The daemon guards its endpoint with a rotating session token. A request
carrying a missing or stale token is answered with HTTP 409 and the fresh
token in the X-Transmission-Session-Id header; the client stores it and
tries again. Every successful reply is checked for a matching tag and a
"success" result before it is handed back.

Usage:
    with SessionClient("http://localhost:9091") as client:
        client.set_auth("admin", "secret")
        response = client.request("session-get")
        print(response.arguments["version"])
"""

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import httpx

from transrpc.errors import (
    RetriesExhaustedError,
    TagMismatchError,
    TransportError,
    UnsuccessfulResponseError,
)
from transrpc.protocol import (
    RequestEnvelope,
    ResponseEnvelope,
    deserialize_response,
    serialize_request,
)
from transrpc.tags import TagAllocator

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "/transmission/rpc"
DEFAULT_TRIES = 3
SESSION_HEADER = "X-Transmission-Session-Id"


class AttemptOutcome(enum.Enum):
    TOKEN_REFRESHED = "token_refreshed"
    DELIVERED = "delivered"
    DISCARDED = "discarded"


@dataclass
class Attempt:
    """Result of a single HTTP exchange."""
    outcome: AttemptOutcome
    status_code: int
    body: Optional[bytes] = None


def _raw_header(headers: httpx.Headers, name: str) -> bytes:
    """First value of a header exactly as received, or b"" when absent."""
    wanted = name.lower().encode("ascii")
    for key, value in headers.raw:
        if key.lower() == wanted:
            return value
    return b""


class SessionClient:
    """
    One logical connection to a daemon instance.

    A single instance may be shared between threads. The session token and
    credentials are guarded by a lock; tags come from the allocator, which
    has its own.
    """

    def __init__(
        self,
        address: str,
        endpoint: str = DEFAULT_ENDPOINT,
        http_client: Optional[httpx.Client] = None,
        tags: Optional[TagAllocator] = None,
        tries: int = DEFAULT_TRIES,
        timeout: Optional[float] = None,
    ):
        """
        Initialize client.

        Args:
            address: Scheme, host and port, e.g. "http://localhost:9091"
            endpoint: RPC path appended to the address
            http_client: Transport to use; built (and owned) here when omitted
            tags: Tag allocator; a private one is created when omitted
            tries: Number of attempts per request
            timeout: Timeout in seconds for a client built here
        """
        if tries < 1:
            raise ValueError(f"tries must be at least 1, got {tries}")

        self.address = address
        self.endpoint = endpoint
        self.tries = tries
        self.tags = tags or TagAllocator()

        self._owns_http = http_client is None
        if http_client is None:
            http_client = httpx.Client(timeout=timeout)
        self._http = http_client

        self._lock = threading.Lock()
        self._token = b""
        self._login = ""
        self._password = ""
        self._auth = False

    @property
    def url(self) -> str:
        return self.address + self.endpoint

    @property
    def token(self) -> str:
        """Last session token issued by the daemon ("" until the first 409)."""
        with self._lock:
            return self._token.decode("latin-1")

    @property
    def auth_enabled(self) -> bool:
        with self._lock:
            return self._auth

    def set_auth(self, login: str, password: str) -> None:
        """Enable HTTP basic auth for subsequent requests."""
        with self._lock:
            self._login = login
            self._password = password
            self._auth = True

    def remove_auth(self) -> None:
        """Disable HTTP basic auth and forget the credentials."""
        with self._lock:
            self._login = ""
            self._password = ""
            self._auth = False

    def _snapshot(self) -> Tuple[bytes, Optional[httpx.BasicAuth]]:
        with self._lock:
            auth = httpx.BasicAuth(self._login, self._password) if self._auth else None
            return self._token, auth

    def _store_token(self, token: bytes) -> None:
        with self._lock:
            self._token = token

    def attempt(self, payload: bytes) -> Attempt:
        """
        Perform one POST of the payload and classify the outcome.

        A 409 stores the token from the response header as raw bytes, so it
        is sent back exactly as the daemon issued it. The response body
        is always closed before returning.

        Raises:
            TransportError: If the request could not be sent
        """
        token, auth = self._snapshot()
        try:
            request = self._http.build_request(
                "POST",
                self.url,
                content=payload,
                headers={SESSION_HEADER: token},
            )
            response = self._http.send(request, auth=auth, stream=True)
        except (httpx.InvalidURL, httpx.TransportError) as e:
            raise TransportError(f"POST {self.url} failed: {e}") from e

        try:
            status = response.status_code
            if status == 409:
                self._store_token(_raw_header(response.headers, SESSION_HEADER))
                logger.info(f"Session token refreshed by {self.url}")
                return Attempt(AttemptOutcome.TOKEN_REFRESHED, status)

            if status == 200:
                try:
                    body = response.read()
                except (httpx.HTTPError, httpx.StreamError) as e:
                    logger.warning(f"Discarding unreadable response body: {e}")
                    return Attempt(AttemptOutcome.DISCARDED, status)
                return Attempt(AttemptOutcome.DELIVERED, status, body)

            logger.warning(f"Discarding response with status {status} from {self.url}")
            return Attempt(AttemptOutcome.DISCARDED, status)
        finally:
            response.close()

    def request_raw(self, payload: bytes) -> bytes:
        """
        Deliver an already serialized payload, retrying on 409 and on
        unusable responses. Tries are immediate, with no delay between them.

        Raises:
            TransportError: On the first transport failure
            RetriesExhaustedError: If no attempt delivered a body
        """
        for t in range(self.tries):
            logger.debug(f"POST {self.url} (try {t + 1}/{self.tries})")
            attempt = self.attempt(payload)
            if attempt.outcome is AttemptOutcome.DELIVERED:
                return attempt.body

        logger.warning(f"Gave up on {self.url} after {self.tries} tries")
        raise RetriesExhaustedError(self.tries)

    def request(self, method: str, arguments: Any = None) -> ResponseEnvelope:
        """
        Call a daemon method and return the validated response.

        The arguments are passed through as-is; interpreting the returned
        `arguments` mapping is up to the caller.

        Raises:
            SerializationError: Before any network I/O if arguments can't be encoded
            TransportError, RetriesExhaustedError: From delivery
            DeserializationError: If the reply is not a response envelope
            TagMismatchError: If the reply answers a different tag
            UnsuccessfulResponseError: If the result is not "success"
        """
        envelope = RequestEnvelope(
            method=method,
            arguments=arguments if arguments is not None else {},
            tag=self.tags.next(),
        )
        payload = serialize_request(envelope)

        response = deserialize_response(self.request_raw(payload))

        if response.tag != envelope.tag:
            raise TagMismatchError(response, envelope.tag)
        if not response.succeeded:
            raise UnsuccessfulResponseError(response)
        return response

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "SessionClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
