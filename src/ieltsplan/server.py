"""aiohttp application exposing the sync and completion endpoints."""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import aiohttp
from aiohttp import web

from ieltsplan._constants import CORS_HEADERS
from ieltsplan.completion import CompletionProxy
from ieltsplan.config import BACKEND_KV, SyncConfig
from ieltsplan.exceptions import (
    ConfigError,
    InvalidPayloadError,
    InvalidRequestError,
    StorageUnavailableError,
    UpstreamError,
)
from ieltsplan.storage.accessor import StateAccessor
from ieltsplan.storage.base import StateBackend
from ieltsplan.storage.kv_rest import KvRestBackend
from ieltsplan.storage.memory import MemoryBackend
from ieltsplan.sync.service import SyncService

_logger = logging.getLogger(__name__)

CONFIG_KEY = web.AppKey("config", SyncConfig)
SYNC_SERVICE_KEY = web.AppKey("sync_service", SyncService)
COMPLETION_PROXY_KEY = web.AppKey("completion_proxy", CompletionProxy)

SYNC_PATH = "/api/sync"
COMPLETION_PATH = "/api/gemini"
_PREFLIGHT_PATHS = frozenset({SYNC_PATH, COMPLETION_PATH})

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _error(status: int, message: str, **headers: str) -> web.Response:
    return web.json_response({"error": message}, status=status, headers=headers or None)


def _method_not_allowed(allowed: str) -> web.Response:
    return _error(405, "Method not allowed", Allow=allowed)


async def _read_json(request: web.Request) -> Any:
    raw = await request.read()
    try:
        return json.loads(raw.decode("utf-8"))
    except (ValueError, RecursionError) as exc:
        # ValueError covers both JSONDecodeError and UnicodeDecodeError.
        raise InvalidRequestError("Invalid JSON body") from exc


@web.middleware
async def cors_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    if request.method == "OPTIONS" and request.path in _PREFLIGHT_PATHS:
        return web.Response(status=204, headers=CORS_HEADERS)
    try:
        response = await handler(request)
    except web.HTTPException as exc:
        exc.headers.update(CORS_HEADERS)
        raise
    response.headers.update(CORS_HEADERS)
    return response


async def sync_handler(request: web.Request) -> web.StreamResponse:
    service = request.app[SYNC_SERVICE_KEY]
    try:
        if request.method == "GET":
            if request.query.get("view") == "regions":
                return web.json_response(await service.load_regions())
            return web.json_response(await service.load())

        if request.method == "POST":
            body = await _read_json(request)
            await service.save(body)
            return web.json_response({"ok": True})
    except InvalidPayloadError as exc:
        return _error(400, str(exc))
    except InvalidRequestError as exc:
        _logger.info("Rejected sync request: %s", exc)
        return _error(exc.status, str(exc))
    except StorageUnavailableError as exc:
        _logger.error("Sync storage failure for %s: %s", exc.key or "<unknown key>", exc)
        return _error(500, "Internal Server Error")
    except Exception:
        _logger.exception("Unhandled error in %s %s", request.method, request.path)
        return _error(500, "Internal Server Error")

    return _method_not_allowed("GET, POST, OPTIONS")


async def completion_handler(request: web.Request) -> web.StreamResponse:
    if request.method != "POST":
        return _method_not_allowed("POST, OPTIONS")

    proxy = request.app[COMPLETION_PROXY_KEY]
    try:
        body = await _read_json(request)
        return web.json_response(await proxy.complete(body))
    except ConfigError as exc:
        _logger.error("%s", exc)
        return _error(500, str(exc))
    except InvalidRequestError as exc:
        return _error(exc.status, str(exc))
    except UpstreamError as exc:
        return _error(exc.status_code or 502, str(exc))
    except Exception:
        _logger.exception("Unhandled error in %s %s", request.method, request.path)
        return _error(500, "Internal Server Error")


async def health_handler(_request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


def _build_backend(config: SyncConfig, http_session: aiohttp.ClientSession) -> StateBackend:
    if config.backend == BACKEND_KV:
        if not (config.kv_url and config.kv_token):
            raise ConfigError("backend 'kv' requires kv_url and kv_token")
        return KvRestBackend(
            config.kv_url,
            config.kv_token,
            http_session,
            timeout=config.storage_timeout,
        )
    return MemoryBackend()


def create_app(
    config: SyncConfig,
    *,
    backend: StateBackend | None = None,
    http_session: aiohttp.ClientSession | None = None,
) -> web.Application:
    """Build the web application.

    Parameters
    ----------
    config : SyncConfig
        Server configuration.
    backend : StateBackend or None
        Storage backend to use instead of the one ``config.backend`` selects.
    http_session : aiohttp.ClientSession or None
        Shared outbound HTTP session. When omitted one is created on
        startup and closed on cleanup.
    """
    app = web.Application(middlewares=[cors_middleware])
    app[CONFIG_KEY] = config

    async def _outbound_ctx(app: web.Application) -> AsyncIterator[None]:
        owned = http_session is None
        session = http_session if http_session is not None else aiohttp.ClientSession()
        state_backend = backend if backend is not None else _build_backend(config, session)
        accessor = StateAccessor(
            state_backend,
            key=config.storage_key,
            ttl_seconds=config.ttl_seconds,
            timeout=config.storage_timeout,
        )
        app[SYNC_SERVICE_KEY] = SyncService(accessor)
        app[COMPLETION_PROXY_KEY] = CompletionProxy(config, session)
        _logger.info("Sync store using %s backend, key %s", type(state_backend).__name__, config.storage_key)
        yield
        if owned:
            await session.close()

    app.cleanup_ctx.append(_outbound_ctx)
    app.router.add_route("*", SYNC_PATH, sync_handler)
    app.router.add_route("*", COMPLETION_PATH, completion_handler)
    app.router.add_get("/health", health_handler)
    return app


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run the IELTS Master Plan sync server.")
    parser.add_argument("--host", help="Interface to bind (default: IELTSPLAN_HOST or 127.0.0.1)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: IELTSPLAN_PORT or 8080)")
    parser.add_argument("--backend", choices=["memory", "kv"], help="Storage backend")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    overrides: dict[str, Any] = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    if args.backend:
        overrides["backend"] = args.backend
    if args.verbose:
        overrides["debug_logging"] = True
        overrides["log_level"] = "DEBUG"

    try:
        config = SyncConfig.from_env(**overrides)
    except ConfigError as exc:
        parser.error(str(exc))

    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")
    web.run_app(create_app(config), host=config.host, port=config.port)
