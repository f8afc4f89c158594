"""
Configuration settings for the cvreflow application.

This file contains configuration for the extraction service and the
PDF rendering / output stages. Values can be overridden through the
environment or a local .env file.
"""

from dotenv import load_dotenv
load_dotenv()          # ← must be before os.getenv(...)
import logging
import os

# Extraction Provider Configuration
# Only "gemini" is supported for now
EXTRACTION_PROVIDER = os.getenv("EXTRACTION_PROVIDER", "gemini").lower()

# Model Configuration
DEFAULT_MODEL = {
    "gemini": os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
}

# Gemini Configuration
GEMINI_API_ENDPOINT = os.getenv(
    "GEMINI_API_ENDPOINT",
    "https://generativelanguage.googleapis.com/v1beta/models/",
)
# Optional fallback, the GUI asks the user for a key on every upload
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
# Unset means the request waits as long as the service takes
GEMINI_TIMEOUT = float(os.environ["GEMINI_TIMEOUT"]) if os.getenv("GEMINI_TIMEOUT") else None

# Rasterizer / output
RENDER_SCALE = float(os.getenv("RENDER_SCALE", "2"))
OUTPUT_FILENAME = os.getenv("OUTPUT_FILENAME", "CV_Updated.pdf")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def get_model_for_provider(provider: str = None) -> str:
    """Get the default model for the specified provider."""
    provider = provider or EXTRACTION_PROVIDER
    return DEFAULT_MODEL.get(provider, DEFAULT_MODEL["gemini"])


def configure_logging(level: str = None) -> None:
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
