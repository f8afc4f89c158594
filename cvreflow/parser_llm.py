"""
LLM-based CV parser.

• Renders the uploaded PDF to page images and sends them, in page order,
  to the extraction service in a single request (no retries).
• Strips code fences from the answer and parses it as JSON.
• Runs normalise_record() so every field is present: "" for missing
  text, [] for missing lists.
"""

from __future__ import annotations
import json, logging

from cvreflow.cleaner import normalise_record, strip_code_fences
from cvreflow.errors import MalformedExtractionError
from cvreflow.extractor import rasterize
from cvreflow.llm_client import extract
from cvreflow.schema_resume import CvRecord

logger = logging.getLogger(__name__)


def parse_cv_response(raw_text: str) -> CvRecord:
    payload = strip_code_fences(raw_text)
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        logger.error(f"Extraction response is not JSON: {e}")
        raise MalformedExtractionError(f"Could not parse extraction response: {e}") from e
    if not isinstance(data, dict):
        raise MalformedExtractionError(
            f"Expected a JSON object, got {type(data).__name__}"
        )
    return CvRecord.model_validate(normalise_record(data))


def extract_cv(pdf_bytes: bytes, api_key: str) -> CvRecord:
    """PDF bytes ➜ CvRecord."""
    images = rasterize(pdf_bytes)
    raw = extract(images, api_key)
    record = parse_cv_response(raw)
    logger.info(
        f"Parsed CV: {len(record.experience)} experience, "
        f"{len(record.education)} education, {len(record.skills)} skills"
    )
    return record
