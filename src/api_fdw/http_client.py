import json
from dataclasses import dataclass
from urllib.parse import urlparse

import httpx

from .errors import TransportError
from .retry_policy import with_retry

SENSITIVE_KEYS = {
    "authorization",
    "cookie",
    "x-api-key",
    "api_key",
    "apikey",
    "token",
    "password",
    "secret",
}


@dataclass
class HttpResponse:
    url: str
    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for key, value in headers.items():
        lower = key.lower()
        if lower in SENSITIVE_KEYS or any(token in lower for token in ("token", "secret", "pass")):
            out[key] = "***REDACTED***"
        else:
            out[key] = value
    return out


class HttpClient:
    """Synchronous GET transport. Status codes are returned, never raised."""

    def __init__(
        self,
        *,
        debug: bool = False,
        max_attempts: int = 1,
        read_timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.debug = debug
        self.max_attempts = max(max_attempts, 1)
        self._timeout = httpx.Timeout(connect=10.0, read=read_timeout, write=30.0, pool=30.0)

        # Ignore env proxy vars; they make CI runs hang.
        self._client = httpx.Client(follow_redirects=True, trust_env=False, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _log(self, msg: str) -> None:
        if self.debug:
            print(msg, flush=True)

    def get(self, url: str, *, headers: dict[str, str]) -> HttpResponse:
        return with_retry(self.max_attempts)(self._get_once)(url, headers)

    def _get_once(self, url: str, headers: dict[str, str]) -> HttpResponse:
        host = urlparse(url).netloc
        self._log(
            f"HTTP GET start host={host} timeout_read={self._timeout.read} url={url} "
            f"headers={json.dumps(redact_headers(headers), sort_keys=True)}"
        )

        try:
            response = self._client.get(url, headers=headers, timeout=self._timeout)
        except (httpx.TimeoutException, httpx.TransportError) as exc:
            msg = (
                "transport error "
                f"host={host} "
                f"url={url} "
                f"exc={type(exc).__name__}: {exc}"
            )
            raise TransportError(msg) from exc

        self._log(
            f"HTTP GET done host={host} status={response.status_code} "
            f"bytes={len(response.content)} url={url}"
        )

        return HttpResponse(
            url=str(response.request.url),
            status_code=response.status_code,
            body=response.content,
        )
