"""
Extraction service client.

This module sends the rendered CV pages, together with the instruction
prompt, to a multimodal model and returns the raw response text. The rest
of the application only talks to ``ExtractionClient.extract`` so another
provider can be added without touching the pipeline.
"""

from __future__ import annotations
import json, logging, textwrap
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

import httpx

from cvreflow.config import (
    EXTRACTION_PROVIDER,
    GEMINI_API_ENDPOINT,
    GEMINI_TIMEOUT,
    get_model_for_provider,
)
from cvreflow.errors import ServiceError
from cvreflow.extractor import PageImage
from cvreflow.schema_resume import CV_SCHEMA

logger = logging.getLogger(__name__)
# httpx logs full request URLs at INFO, and the URL carries the API key
logging.getLogger("httpx").setLevel(logging.WARNING)

EXTRACTION_PROMPT = textwrap.dedent(
    f"""
Extract all data from this CV/resume. Return ONLY a valid JSON object with this structure:

{json.dumps(CV_SCHEMA, indent=2)}

Lists may hold any number of items shaped like the one shown.
Use "" for anything that is not in the document.
Do not include markdown formatting or explanations.
"""
).strip()


@dataclass(frozen=True)
class ExtractionRequest:
    """Instruction prompt followed by the page images, in page order."""
    images: Tuple[PageImage, ...]
    prompt: str

    def to_payload(self) -> Dict[str, Any]:
        parts = [{"text": self.prompt}]
        for image in self.images:
            parts.append({"inline_data": {"mime_type": image.mime_type, "data": image.b64}})
        return {"contents": [{"parts": parts}]}


class ExtractionClient(ABC):
    """Abstract base class for extraction clients."""

    @abstractmethod
    def extract(self, images: Sequence[PageImage], api_key: str) -> str:
        """Send the pages to the extraction service and return its text."""
        pass


def _error_message(resp: httpx.Response) -> str:
    try:
        message = resp.json().get("error", {}).get("message")
    except (ValueError, AttributeError):
        message = None
    return message or resp.reason_phrase


def _response_text(data: Any) -> str:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        text = None
    if not isinstance(text, str):
        raise ServiceError("Invalid response from service")
    return text


class GeminiClient(ExtractionClient):
    """Gemini ``generateContent`` over plain HTTPS."""

    def __init__(
        self,
        model: str | None = None,
        endpoint: str | None = None,
        timeout: float | None = GEMINI_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.model = model or get_model_for_provider("gemini")
        self.endpoint = endpoint or GEMINI_API_ENDPOINT
        self.timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.endpoint}{self.model}:generateContent"

    def extract(self, images: Sequence[PageImage], api_key: str) -> str:
        if not api_key:
            raise ServiceError("API key is required")

        request = ExtractionRequest(images=tuple(images), prompt=EXTRACTION_PROMPT)
        logger.info(f"Sending {len(request.images)} page(s) to {self.model}")
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                resp = client.post(
                    self.url,
                    params={"key": api_key},
                    json=request.to_payload(),
                    headers={"Content-Type": "application/json"},
                )
            if not resp.is_success:
                message = _error_message(resp)
                logger.error(f"Extraction service failed {resp.status_code}: {message}")
                raise ServiceError(f"Extraction service error: {message}", status_code=resp.status_code)
            text = _response_text(resp.json())
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"Error in extraction request: {e}")
            raise ServiceError(f"Failed to process with extraction service: {e}") from e

        logger.info(f"Received extraction response ({len(text)} chars)")
        return text


def get_extraction_client() -> ExtractionClient:
    """Factory function to get the extraction client based on configuration."""
    if EXTRACTION_PROVIDER == "gemini":
        return GeminiClient()
    raise ValueError(f"Unsupported extraction provider: {EXTRACTION_PROVIDER}")


# Create a global client instance
_client = None

def extract(images: Sequence[PageImage], api_key: str) -> str:
    """Send ``images`` to the configured extraction service."""
    global _client
    if _client is None:
        _client = get_extraction_client()

    return _client.extract(images, api_key)
