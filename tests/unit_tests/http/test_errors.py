import pytest

from keywordsai_sdk.http.errors import APIError, KeywordsAIClientError


@pytest.mark.parametrize(
    "api_error, expected_text",
    [
        (
            APIError(status_code=400, error="Bad request"),
            "KeywordsAI API error (status 400): Bad request",
        ),
        (
            APIError(status_code=500, message="Internal server error"),
            "KeywordsAI API error (status 500): Internal server error",
        ),
        (
            APIError(status_code=400, error="Bad request", message="Invalid input"),
            "KeywordsAI API error (status 400): Invalid input",
        ),
        (
            APIError(status_code=404),
            "KeywordsAI API error (status 404)",
        ),
        (
            APIError(status_code=404, error="", message=""),
            "KeywordsAI API error (status 404)",
        ),
    ],
)
def test_api_error_rendering(api_error: APIError, expected_text: str) -> None:
    # when
    result = str(api_error)

    # then
    assert result == expected_text


def test_api_error_exposes_its_fields() -> None:
    # when
    error = APIError(
        status_code=422,
        error="validation_error",
        message="Field is missing",
        details="model",
    )

    # then
    assert isinstance(error, KeywordsAIClientError)
    assert error.status_code == 422
    assert error.error == "validation_error"
    assert error.message == "Field is missing"
    assert error.details == "model"
    assert "status_code=422" in repr(error)
