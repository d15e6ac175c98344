"""Bridges to external services.

``gemini`` is the only wire-level contract: structured JSON generation
against the Gemini ``generateContent`` REST endpoint.
"""

from greenlens.bridge.gemini import GeminiTransport, StructuredGenerator, parse_structured

__all__ = ["GeminiTransport", "StructuredGenerator", "parse_structured"]
