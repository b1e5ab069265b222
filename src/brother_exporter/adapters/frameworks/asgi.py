"""ASGI application exposing the exporter's HTTP endpoints.

The app is framework-agnostic and can be served by any ASGI server
(uvicorn, hypercorn, daphne). Every ``GET /metrics`` runs one scrape of
the device.
"""

import json
from collections.abc import Callable, Coroutine
from typing import Any

from brother_exporter.adapters.frameworks.query_params import (
    parse_level_param,
    parse_query_string,
    parse_since_param,
)
from brother_exporter.adapters.process import collect_process_samples
from brother_exporter.core.collector import ScrapeCollector
from brother_exporter.core.encoding import ndjson, prometheus
from brother_exporter.core.logs import log_exception
from brother_exporter.core.ports import LogStoragePort

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]


async def _send_response(send: Send, status: int, content_type: str, body: str) -> None:
    """Send an HTTP response with headers and body.

    Args:
        send: ASGI send callable for writing response.
        status: HTTP status code.
        content_type: Content-Type header value.
        body: Response body as string (will be encoded to bytes).
    """
    headers = [(b"content-type", content_type.encode())]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body.encode()})


async def _handle_endpoint(
    send: Send,
    endpoint_func: Callable[[], Coroutine[Any, Any, str]],
    content_type: str,
    log_message: str,
) -> None:
    """Execute an endpoint function with error handling and send response.

    Args:
        send: ASGI send callable for writing response.
        endpoint_func: Async function that returns response body.
        content_type: Content-Type header for success response.
        log_message: Message to log on error.
    """
    try:
        body = await endpoint_func()
    except Exception:
        log_exception(log_message)
        error_body = json.dumps({"error": "Internal Server Error"})
        await _send_response(send, 500, "application/json", error_body)
        return
    await _send_response(send, 200, content_type, body)


def create_asgi_app(
    collector: ScrapeCollector,
    log_storage: LogStoragePort | None = None,
    process_metrics: bool = True,
) -> ASGIApp:
    """Create an ASGI app with /metrics, /logs, and /healthz endpoints.

    A failed scrape still answers ``/metrics`` with 200; the failure is
    visible as ``brother_scrape_success 0``.

    Args:
        collector: Runs one device scrape per /metrics request.
        log_storage: Storage behind /logs; the endpoint returns an empty
            body when omitted.
        process_metrics: Append ``process_*`` runtime samples to /metrics.

    Returns:
        ASGI application callable.
    """

    async def render_metrics() -> str:
        result = await collector.collect()
        samples = result.all_samples
        if process_metrics:
            samples.extend(collect_process_samples())
        return prometheus.encode_samples(samples)

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await _handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        path = scope["path"]

        if path == "/metrics":
            await _handle_endpoint(
                send,
                render_metrics,
                prometheus.CONTENT_TYPE,
                "Error encoding metrics endpoint",
            )
        elif path == "/logs":
            params = parse_query_string(scope.get("query_string", b""))
            since = parse_since_param(params)
            level = parse_level_param(params)

            async def render_logs() -> str:
                if log_storage is None:
                    return ""
                return ndjson.encode_logs(log_storage.read(since=since, level=level))

            await _handle_endpoint(
                send,
                render_logs,
                ndjson.CONTENT_TYPE,
                "Error encoding logs endpoint",
            )
        elif path == "/healthz":
            await _send_response(
                send, 200, "application/json", json.dumps({"status": "ok"})
            )
        else:
            await _send_response(send, 404, "text/plain", "Not Found")

    return app


async def _handle_lifespan(receive: Receive, send: Send) -> None:
    """Acknowledge ASGI lifespan startup and shutdown events."""
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
