"""Stateless forwarder to the Gemini ``generateContent`` API.

The dashboard's chat widget and dictionary lookup post either Gemini-style
``{contents, config}`` bodies or simple ``{messages, systemInstruction}``
bodies. Both are reshaped into one upstream request; the upstream answer is
reduced to a fixed ``{response: {text}, candidates, usageMetadata}`` envelope.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from ieltsplan._redact import redact_for_log
from ieltsplan.config import SyncConfig
from ieltsplan.exceptions import ConfigError, InvalidRequestError, UpstreamError

_logger = logging.getLogger(__name__)

_ROLE_ALIASES = {"assistant": "model", "model": "model", "user": "user"}


def messages_to_contents(messages: list[Any]) -> list[dict[str, Any]]:
    """Convert ``[{role, text}]`` chat messages to Gemini ``contents``."""
    contents: list[dict[str, Any]] = []
    for message in messages:
        if not isinstance(message, dict):
            raise InvalidRequestError("messages must be objects")
        role = _ROLE_ALIASES.get(str(message.get("role", "user")).lower())
        if role is None:
            raise InvalidRequestError(f"unsupported message role: {message.get('role')!r}")
        text = message.get("text")
        if not isinstance(text, str):
            raise InvalidRequestError("message text must be a string")
        contents.append({"role": role, "parts": [{"text": text}]})
    return contents


def build_upstream_body(body: Any) -> dict[str, Any]:
    """Reshape a proxy request body into a ``generateContent`` request."""
    if not isinstance(body, dict):
        raise InvalidRequestError("Body must be a plain object")

    config = body.get("config")
    config = dict(config) if isinstance(config, dict) else {}

    if isinstance(body.get("contents"), list):
        contents = body["contents"]
    elif isinstance(body.get("messages"), list):
        contents = messages_to_contents(body["messages"])
    else:
        raise InvalidRequestError("Body must contain 'contents' or 'messages'")

    upstream: dict[str, Any] = {"contents": contents}

    system_instruction = config.pop("systemInstruction", None) or body.get("systemInstruction")
    if isinstance(system_instruction, str) and system_instruction.strip():
        upstream["systemInstruction"] = {"parts": [{"text": system_instruction}]}
    elif isinstance(system_instruction, dict):
        upstream["systemInstruction"] = system_instruction

    if config:
        upstream["generationConfig"] = config
    return upstream


def first_candidate_text(response: dict[str, Any]) -> str:
    candidates = response.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def shape_response(response: dict[str, Any]) -> dict[str, Any]:
    return {
        "response": {"text": first_candidate_text(response)},
        "candidates": response.get("candidates") or [],
        "usageMetadata": response.get("usageMetadata") or {},
    }


def _upstream_error_message(text: str) -> str:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return text[:200] or "Unknown upstream error"
    if isinstance(parsed, dict) and isinstance(parsed.get("error"), dict):
        message = parsed["error"].get("message")
        if message:
            return str(message)
    return "Unknown upstream error"


class CompletionProxy:
    """Forward completion requests using a shared aiohttp session."""

    def __init__(self, config: SyncConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.upstream_timeout)

    @property
    def endpoint(self) -> str:
        return f"{self._config.gemini_base_url.rstrip('/')}/models/{self._config.gemini_model}:generateContent"

    async def complete(self, body: Any) -> dict[str, Any]:
        """Forward *body* upstream and return the shaped envelope.

        Raises
        ------
        ConfigError
            No API key is configured.
        InvalidRequestError
            *body* is not a usable completion request.
        UpstreamError
            The upstream answered non-2xx or could not be reached.
        """
        api_key = self._config.gemini_api_key
        if not api_key:
            raise ConfigError("Server configuration error: API key missing")

        upstream_body = build_upstream_body(body)
        if self._config.debug_logging:
            _logger.debug("Completion request: %s", redact_for_log(upstream_body))

        headers = {
            "content-type": "application/json",
            "x-goog-api-key": api_key,
        }
        try:
            async with self._http.post(
                self.endpoint,
                data=json.dumps(upstream_body),
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                status = resp.status
        except (aiohttp.ClientError, TimeoutError) as exc:
            _logger.error("Completion upstream unreachable: %r", exc)
            raise UpstreamError("Upstream request failed") from exc

        if not 200 <= status < 300:
            message = _upstream_error_message(text)
            _logger.error("Completion upstream HTTP %s: %s", status, message)
            raise UpstreamError(f"Gemini API error: {message}", status_code=status)

        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            raise UpstreamError("Upstream returned invalid JSON", status_code=502) from exc
        if not isinstance(parsed, dict):
            raise UpstreamError("Upstream returned an unexpected payload", status_code=502)
        return shape_response(parsed)
