from datetime import datetime, timezone

import pytest
from aioresponses import aioresponses
from requests_mock.mocker import Mocker

from keywordsai_sdk.http.client import KeywordsAIHTTPClient
from keywordsai_sdk.http.entities import CreateKeyRequest, TemporaryKey
from keywordsai_sdk.services.keys import KeysService

KEY_RESPONSE = {
    "id": "k-1",
    "key": "tmp-abcdef",
    "name": "ci",
    "expires_at": "2024-06-01T00:00:00Z",
    "is_active": True,
    "usage_limit": 100,
    "usage_count": 3,
}


def test_create_sends_expiry_in_utc(
    requests_mock: Mocker,
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    requests_mock.post(f"{api_url}/api/temporary-keys", json=KEY_RESPONSE)
    service = KeysService(client=http_client)

    # when
    result = service.create(
        request=CreateKeyRequest(
            expires_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
            name="ci",
            usage_limit=100,
        )
    )

    # then
    assert result.id == "k-1"
    assert result.expires_at == datetime(2024, 6, 1, tzinfo=timezone.utc)
    assert result.usage_count == 3
    assert requests_mock.last_request.json() == {
        "expires_at": "2024-06-01T00:00:00Z",
        "name": "ci",
        "usage_limit": 100,
    }


def test_list(
    requests_mock: Mocker,
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    requests_mock.get(f"{api_url}/api/temporary-keys", json=[KEY_RESPONSE])
    service = KeysService(client=http_client)

    # when
    result = service.list()

    # then
    assert len(result) == 1
    assert isinstance(result[0], TemporaryKey)


def test_get_update_and_delete_use_key_path(
    requests_mock: Mocker,
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    requests_mock.get(f"{api_url}/api/temporary-keys/k-1", json=KEY_RESPONSE)
    requests_mock.patch(
        f"{api_url}/api/temporary-keys/k-1",
        json={**KEY_RESPONSE, "is_active": False},
    )
    requests_mock.delete(f"{api_url}/api/temporary-keys/k-1", status_code=204)
    service = KeysService(client=http_client)

    # when
    fetched = service.get(key_id="k-1")
    updated = service.update(key_id="k-1", updates={"is_active": False})
    service.delete(key_id="k-1")

    # then
    assert fetched.is_active is True
    assert updated.is_active is False
    assert requests_mock.request_history[1].json() == {"is_active": False}
    assert requests_mock.last_request.method == "DELETE"


@pytest.mark.asyncio
async def test_get_async(
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    service = KeysService(client=http_client)

    with aioresponses() as m:
        m.get(f"{api_url}/api/temporary-keys/k-1", payload=KEY_RESPONSE)

        # when
        result = await service.get_async(key_id="k-1")

    # then
    assert result.key == "tmp-abcdef"
