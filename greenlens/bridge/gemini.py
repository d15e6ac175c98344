"""Gemini bridge — structured JSON generation over the REST API.

Bridge boundary
---------------
The estimator, projector and nudge generator depend only on the
``StructuredGenerator`` protocol. ``GeminiTransport`` is the production
implementation: it posts one ``generateContent`` request per call with a
strict response schema and returns the raw JSON text of the reply.

Failure mapping
---------------
- network errors, timeouts, non-2xx statuses -> ``ServiceUnavailable``
- an envelope that is not valid JSON          -> ``SchemaValidationFailure``
- no candidate text                           -> ``EmptyResponse``

Decoding the text into domain models is ``parse_structured``'s job, so
every caller validates the payload the same way.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar, runtime_checkable

import httpx
from pydantic import TypeAdapter, ValidationError

from greenlens.config import GreenLensConfig
from greenlens.core.errors import (
    EmptyResponse,
    SchemaValidationFailure,
    ServiceUnavailable,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class StructuredGenerator(Protocol):
    """Anything that can turn a prompt into schema-constrained JSON text."""

    async def generate(
        self,
        prompt: str,
        *,
        response_schema: dict[str, Any],
        system_instruction: str | None = None,
    ) -> str: ...


def parse_structured(text: str, target: type[T]) -> T:
    """Decode and validate a JSON reply against ``target``.

    Missing fields, wrong value types, out-of-range numbers and malformed
    encoding all surface as ``SchemaValidationFailure``.
    """
    try:
        return TypeAdapter(target).validate_json(text, strict=True)
    except ValidationError as exc:
        raise SchemaValidationFailure(
            f"Response does not match the {getattr(target, '__name__', target)} "
            f"schema: {exc.error_count()} error(s)"
        ) from exc


class GeminiTransport:
    """Async client for the Gemini ``generateContent`` endpoint.

    Parameters
    ----------
    config:
        Settings providing the endpoint, model, credential and timeout.
    client:
        Optional pre-built ``httpx.AsyncClient`` (tests inject one backed
        by ``httpx.MockTransport``). Created lazily otherwise.
    """

    def __init__(
        self,
        config: GreenLensConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._owns_client = client is None

    @property
    def url(self) -> str:
        endpoint = self._config.endpoint.rstrip("/")
        return f"{endpoint}/models/{self._config.model}:generateContent"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._config.request_timeout_seconds,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> GeminiTransport:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Request / response
    # ------------------------------------------------------------------

    @staticmethod
    def build_payload(
        prompt: str,
        response_schema: dict[str, Any],
        system_instruction: str | None = None,
    ) -> dict[str, Any]:
        """Build the ``generateContent`` request body."""
        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            },
        }
        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}
        return payload

    async def generate(
        self,
        prompt: str,
        *,
        response_schema: dict[str, Any],
        system_instruction: str | None = None,
    ) -> str:
        """Send one structured-generation request and return the reply text."""
        if not self._config.api_key:
            raise ServiceUnavailable("No API key configured for the estimation service.")

        payload = self.build_payload(prompt, response_schema, system_instruction)
        logger.debug("POST %s (model=%s)", self.url, self._config.model)

        try:
            response = await self._get_client().post(
                self.url,
                json=payload,
                headers={"x-goog-api-key": self._config.api_key},
            )
        except httpx.TimeoutException as exc:
            raise ServiceUnavailable(f"Estimation service timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise ServiceUnavailable(f"Estimation service unreachable: {exc}") from exc

        if response.status_code != 200:
            raise ServiceUnavailable(
                _describe_status(response.status_code),
                status_code=response.status_code,
            )

        try:
            envelope = response.json()
        except ValueError as exc:
            raise SchemaValidationFailure(
                "Estimation service returned a malformed envelope."
            ) from exc

        text = _extract_text(envelope)
        if not text.strip():
            raise EmptyResponse("Estimation service returned no content.")
        return text


def _describe_status(status_code: int) -> str:
    if status_code in (401, 403):
        return f"Estimation service rejected the credential (HTTP {status_code})."
    if status_code == 429:
        return "Estimation service quota exhausted (HTTP 429)."
    return f"Estimation service error (HTTP {status_code})."


def _extract_text(envelope: Any) -> str:
    """Concatenate the text parts of the first candidate."""
    if not isinstance(envelope, dict):
        raise SchemaValidationFailure("Estimation service envelope is not an object.")
    candidates = envelope.get("candidates") or []
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content") or {}
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    texts = []
    for part in parts:
        if not isinstance(part, dict):
            continue
        text = part.get("text", "")
        if not isinstance(text, str):
            raise SchemaValidationFailure(
                f"Estimation service returned a non-text part ({type(text).__name__})."
            )
        texts.append(text)
    return "".join(texts)
