import pytest

from keywordsai_sdk.config import API_KEY_ENV, BASE_URL_ENV


@pytest.fixture(autouse=True)
def clean_keywordsai_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    monkeypatch.delenv(BASE_URL_ENV, raising=False)
