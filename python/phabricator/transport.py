from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote_plus, urljoin

import httpx

from .errors import TransportError
from .logging import get_logger, sanitize_form

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class ConduitTransport:
    """Issues single form-encoded POSTs against a Conduit API root.

    The API token travels as the ``api.token`` form field, never as a header.
    There is no retry: a network or timeout failure raises TransportError and
    the caller decides what to do. HTTP status codes are not interpreted;
    Conduit reports failures inside the response envelope.
    """

    def __init__(
        self,
        api_url: str,
        token: str,
        *,
        timeout_seconds: float = 10.0,
        http_client: Optional[httpx.Client] = None,
        logger: logging.Logger | None = None,
    ):
        if not api_url or not api_url.strip():
            raise ValueError("api_url is required")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        self.api_url = api_url.strip() if api_url.strip().endswith("/") else api_url.strip() + "/"
        self._token = token
        self.timeout_seconds = float(timeout_seconds)
        self.logger = get_logger(logger)
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=self.timeout_seconds)

    def url_for(self, procedure: str) -> str:
        return urljoin(self.api_url, procedure)

    def post(self, url: str, body: str = "") -> bytes:
        form = f"api.token={quote_plus(self._token)}"
        if body:
            form = f"{form}&{body}"
        try:
            response = self._client.post(
                url,
                content=form.encode("utf-8"),
                headers={"Content-Type": FORM_CONTENT_TYPE},
                timeout=self.timeout_seconds,
            )
            content = response.content
        except httpx.HTTPError as exc:
            self.logger.error(
                "Request to Phabricator failed",
                extra={"url": url, "form": sanitize_form(form), "error": str(exc)},
            )
            raise TransportError(url, str(exc) or exc.__class__.__name__) from exc

        self.logger.info(
            "HTTP Request",
            extra={"url": url, "method": "POST", "status": response.status_code},
        )
        if not response.is_success:
            self.logger.warning(
                "Unexpected HTTP status %s from %s", response.status_code, url
            )
        return content

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ConduitTransport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
