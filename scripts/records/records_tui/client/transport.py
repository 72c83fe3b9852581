"""Default request executor over httpx."""

from __future__ import annotations

import logging

import httpx

from records_tui.client import Request, Response
from records_tui.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class HttpxExecutor:
    """Executes requests synchronously; a static bearer token is optional."""

    def __init__(
        self,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self.token = token
        self._client = client or httpx.Client(timeout=timeout)

    def __call__(self, request: Request) -> Response:
        headers = {"Accept": "application/json", **request.headers}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            resp = self._client.request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", request.method, request.url, exc)
            raise TransportError(f"failed to reach {request.url}: {exc}") from exc
        return Response(status_code=resp.status_code, body=resp.content)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpxExecutor":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
