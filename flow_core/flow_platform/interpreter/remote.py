"""
    RemoteInterpreter — optional hosted-model intent source.

    Sends one chat-completion request per user command and turns the
    reply into a ``DraftCommand``.  It never raises: every failure
    (missing key, network error, non-success status, unexpected body,
    non-JSON text, invalid command shape) comes back as a
    ``RemoteFailure`` so the caller can fall back to the rule-based
    classifier.  No retries.
"""
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

import httpx

from flow_api.types import NodeRef
from flow_core.services.exceptions import MissingCredentialError, RemoteResponseError

from ..config import RemoteConfig
from .drafts import DraftCommand
from .prompts import render_prompt

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


# ── Result type ──────────────────────────────────────────────────

@dataclass(frozen=True)
class RemoteSuccess:
    draft: DraftCommand

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class RemoteFailure:
    reason: str

    @property
    def ok(self) -> bool:
        return False


RemoteResult = Union[RemoteSuccess, RemoteFailure]


# ── Reply parsing ────────────────────────────────────────────────

def extract_json_object(text: str) -> str:
    """
    Return the first balanced ``{...}`` substring, ignoring code fences
    and braces inside JSON strings.

    Raises:
        RemoteResponseError: If there is no complete object.
    """
    text = _CODE_FENCE.sub("", text).strip()
    start = text.find("{")
    if start == -1:
        raise RemoteResponseError("No JSON object in reply.")

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]

    raise RemoteResponseError("Unbalanced JSON object in reply.")


def parse_command_text(text: str) -> DraftCommand:
    """
    Raises:
        RemoteResponseError: No JSON object found.
        ValueError:          Invalid JSON or command shape.
    """
    return DraftCommand.from_payload(json.loads(extract_json_object(text)))


def reply_text(data: Any) -> str:
    """Pull the generated text out of a chat-completions style body."""
    if isinstance(data, dict):
        choices = data.get("choices")
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            message = choices[0].get("message")
            if isinstance(message, dict) and isinstance(message.get("content"), str):
                return message["content"]
        for key in ("content", "generated_text"):
            if isinstance(data.get(key), str):
                return data[key]
    if isinstance(data, list) and data and isinstance(data[0], dict):
        if isinstance(data[0].get("generated_text"), str):
            return data[0]["generated_text"]
    raise RemoteResponseError("Unexpected response format.")


# ── Adapter ──────────────────────────────────────────────────────

class RemoteInterpreter:
    """
    Usage:
        remote = RemoteInterpreter(RemoteConfig.from_env())
        result = await remote.request_draft("add a node", nodes)
        if result.ok:
            draft = result.draft

    Args:
        config: Endpoint, key, model and timeout.
        client: Optional shared ``httpx.AsyncClient``; a short-lived
                client is opened per request otherwise.
    """

    def __init__(self, config: RemoteConfig, client: Optional[httpx.AsyncClient] = None):
        self._config = config
        self._client = client

    @property
    def config(self) -> RemoteConfig:
        return self._config

    @property
    def available(self) -> bool:
        return self._config.is_configured

    async def request_draft(self, text: str, nodes: Sequence[NodeRef]) -> RemoteResult:
        try:
            reply = await self._complete(render_prompt(text, nodes))
            draft = parse_command_text(reply)
        except Exception as e:
            return RemoteFailure(f"{type(e).__name__}: {e}")

        logger.debug("Remote draft for %r: %s", text, draft.type.value)
        return RemoteSuccess(draft)

    async def _complete(self, prompt: str) -> str:
        if not self._config.is_configured:
            raise MissingCredentialError("API key not configured.")

        payload = {
            "messages": [{"role": "user", "content": prompt}],
            "model": self._config.model,
        }
        headers = {
            "Content-Type": "application/json",
            "api-subscription-key": self._config.api_key,
        }

        if self._client is not None:
            response = await self._client.post(
                self._config.endpoint, json=payload, headers=headers,
                timeout=self._config.timeout,
            )
        else:
            async with httpx.AsyncClient(timeout=self._config.timeout) as client:
                response = await client.post(self._config.endpoint, json=payload, headers=headers)

        response.raise_for_status()
        return reply_text(response.json())
