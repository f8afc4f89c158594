"""
Failure types raised by the extraction pipeline.

Every one of them is terminal for the current upload: nothing in the
pipeline retries, the caller reports the message and lets the user try
again.
"""

from __future__ import annotations

API_KEY_HELP_URL = "https://aistudio.google.com/apikey"


class CvReflowError(Exception):
    """Base class for all cvreflow failures."""


class DocumentParseError(CvReflowError):
    """The uploaded bytes are not a readable PDF."""


class ServiceError(CvReflowError):
    """The extraction service call failed or returned unusable content."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MalformedExtractionError(CvReflowError):
    """The service answered, but not with a JSON object."""


def describe_failure(exc: Exception) -> str:
    """Turn a pipeline failure into the message shown to the user."""
    message = str(exc)
    if "API key" in message:
        return (
            "Invalid Gemini API key. Please check your API key and try again.\n\n"
            f"Get your API key from: {API_KEY_HELP_URL}"
        )
    if "quota" in message.lower():
        return "API quota exceeded. Please check your Gemini API usage limits."
    if isinstance(exc, MalformedExtractionError):
        return "Failed to parse CV data. Please try again."
    return f"Error processing PDF: {message}"
