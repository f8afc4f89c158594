from cvreflow.config import get_model_for_provider
from cvreflow.errors import (
    CvReflowError,
    DocumentParseError,
    MalformedExtractionError,
    ServiceError,
    describe_failure,
)


def test_taxonomy():
    for cls in (DocumentParseError, ServiceError, MalformedExtractionError):
        assert issubclass(cls, CvReflowError)


def test_service_error_keeps_status():
    err = ServiceError("boom", status_code=503)

    assert err.message == "boom"
    assert err.status_code == 503
    assert str(err) == "boom"


def test_describe_failure_variants():
    assert "Invalid Gemini API key" in describe_failure(ServiceError("API key not valid"))
    assert "aistudio.google.com/apikey" in describe_failure(ServiceError("API key is required"))
    assert describe_failure(ServiceError("Quota exceeded for metric")).startswith("API quota exceeded")
    assert describe_failure(DocumentParseError("Invalid PDF document")) == (
        "Error processing PDF: Invalid PDF document"
    )


def test_unknown_provider_falls_back_to_gemini_model():
    assert get_model_for_provider("other") == get_model_for_provider("gemini")
