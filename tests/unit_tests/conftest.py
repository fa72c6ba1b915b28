import pytest

from keywordsai_sdk.config import with_base_url
from keywordsai_sdk.http.client import KeywordsAIHTTPClient

API_URL = "http://some.com"
API_KEY = "my-api-key"


@pytest.fixture(scope="function")
def api_url() -> str:
    return API_URL


@pytest.fixture(scope="function")
def http_client() -> KeywordsAIHTTPClient:
    return KeywordsAIHTTPClient(
        api_key=API_KEY,
        options=[with_base_url(API_URL)],
        environment={},
    )
