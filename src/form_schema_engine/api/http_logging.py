"""
Request/response logging for the forms API.

Each HTTP exchange becomes one JSON line on the `form_schema_engine.http`
logger. JSON bodies are redacted; when the request carries a form schema the
line also gets a short `form` digest (field count, locales, step mode) so
schemas can be traced without dumping them.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Any, Dict, List, Optional, Tuple

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from form_schema_engine.config import EngineSettings, load_settings

logger = logging.getLogger("form_schema_engine.http")

Headers = List[Tuple[bytes, bytes]]

REDACTED = "[redacted]"

_SECRET_NAMES = frozenset(
    {
        "authorization",
        "proxy-authorization",
        "cookie",
        "set-cookie",
        "x-api-key",
        "api_key",
        "access_token",
        "refresh_token",
        "password",
        "secret",
        "token",
    }
)


def scrub(value: Any) -> Any:
    """Replace values stored under secret-looking keys, at any depth."""
    if isinstance(value, dict):
        return {key: REDACTED if str(key).lower() in _SECRET_NAMES else scrub(item) for key, item in value.items()}
    if isinstance(value, list):
        return [scrub(item) for item in value]
    return value


def _header_map(headers: Headers) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for raw_key, raw_value in headers:
        key = raw_key.decode("latin-1").lower()
        out[key] = REDACTED if key in _SECRET_NAMES else raw_value.decode("latin-1")
    return out


def _first_header(headers: Headers, name: str) -> str:
    wanted = name.encode("latin-1")
    return next((v.decode("latin-1") for k, v in headers if k.lower() == wanted), "")


def form_digest(payload: Any) -> Optional[Dict[str, Any]]:
    """Summary of the `schema` carried by a forms API request body, if any."""
    if not isinstance(payload, dict):
        return None
    schema = payload.get("schema")
    if isinstance(schema, str):
        try:
            schema = json.loads(schema)
        except json.JSONDecodeError:
            return {"parseable": False}
    if not isinstance(schema, dict):
        return None
    fields = schema.get("fields")
    fields = fields if isinstance(fields, list) else []
    groups = sum(1 for f in fields if isinstance(f, dict) and f.get("type") == "group")
    return {
        "fields": len(fields),
        "groups": groups,
        "steps": bool(fields) and groups == len(fields),
        "locales": schema.get("supportedLocales"),
    }


class _Capture:
    """Bounded copy of one side of the exchange."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.data = bytearray()
        self.truncated = False
        self.headers: Headers = []

    def feed(self, chunk: bytes) -> None:
        if not chunk or self.truncated:
            return
        room = self.limit - len(self.data)
        self.data.extend(chunk[: max(room, 0)])
        self.truncated = len(chunk) > room

    @property
    def content_type(self) -> str:
        return _first_header(self.headers, "content-type").lower()

    def decoded(self) -> Any:
        if not self.data:
            return None
        ctype = self.content_type
        if "json" in ctype:
            text = self.data.decode("utf-8", errors="replace")
            try:
                return scrub(json.loads(text))
            except json.JSONDecodeError:
                # Cut off by the capture limit.
                return text
        if ctype.startswith("text/"):
            return self.data.decode("utf-8", errors="replace")
        return f"<{len(self.data)} bytes>"

    def describe(self, with_headers: bool) -> Dict[str, Any]:
        out: Dict[str, Any] = {"contentType": self.content_type, "body": self.decoded()}
        if self.truncated:
            out["truncated"] = True
        if with_headers:
            out["headers"] = _header_map(self.headers)
        return out


class _Exchange:
    def __init__(self, scope: Scope, limit: int) -> None:
        self.scope = scope
        self.started = time.perf_counter()
        self.request = _Capture(limit)
        self.request.headers = list(scope.get("headers") or [])
        self.response = _Capture(limit)
        self.status: Optional[int] = None
        self.request_id = _first_header(self.request.headers, "x-request-id") or uuid.uuid4().hex[:12]

    def record(self, with_headers: bool, error: Optional[BaseException]) -> Dict[str, Any]:
        request = self.request.describe(with_headers)
        out: Dict[str, Any] = {
            "id": self.request_id,
            "method": str(self.scope.get("method") or "").upper(),
            "path": str(self.scope.get("path") or ""),
            "status": self.status,
            "ms": round((time.perf_counter() - self.started) * 1000, 1),
            "request": request,
            "response": self.response.describe(with_headers),
        }
        digest = form_digest(request["body"])
        if digest is not None:
            out["form"] = digest
        if error is not None:
            out["error"] = f"{type(error).__name__}: {error}"
        return out


class HttpLoggingMiddleware:
    """Plain ASGI middleware; streaming responses pass through untouched."""

    def __init__(self, app: ASGIApp, *, log_headers: bool = False, max_body_bytes: int = 4096) -> None:
        self.app = app
        self.log_headers = log_headers
        self.max_body_bytes = max(0, max_body_bytes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        exchange = _Exchange(scope, self.max_body_bytes)

        async def tap_receive() -> Message:
            message = await receive()
            if message.get("type") == "http.request":
                exchange.request.feed(message.get("body") or b"")
            return message

        async def tap_send(message: Message) -> None:
            kind = message.get("type")
            if kind == "http.response.start":
                exchange.status = int(message.get("status") or 0)
                exchange.response.headers = list(message.get("headers") or [])
            elif kind == "http.response.body":
                exchange.response.feed(message.get("body") or b"")
            await send(message)

        error: Optional[BaseException] = None
        try:
            await self.app(scope, tap_receive, tap_send)
        except Exception as e:
            error = e
            raise
        finally:
            line = exchange.record(self.log_headers, error)
            logger.info(json.dumps(line, ensure_ascii=False, separators=(",", ":"), default=str))


def install_http_logging(app: Any, settings: Optional[EngineSettings] = None) -> bool:
    """Add `HttpLoggingMiddleware` when `FORM_ENGINE_HTTP_LOG` is on. Returns whether it was added."""
    settings = settings or load_settings()
    if not settings.http_log:
        return False
    app.add_middleware(
        HttpLoggingMiddleware,
        log_headers=settings.http_log_headers,
        max_body_bytes=settings.http_log_body_max_bytes,
    )
    return True
