from typing import Any, Dict, List

from keywordsai_sdk.http.client import KeywordsAIHTTPClient
from keywordsai_sdk.http.entities import CreateKeyRequest, TemporaryKey
from keywordsai_sdk.http.utils.requests import encode_path_parameter

TEMPORARY_KEYS_PATH = "/api/temporary-keys"


class KeysService:
    """Temporary API keys."""

    def __init__(self, client: KeywordsAIHTTPClient):
        self.__client = client

    def create(self, request: CreateKeyRequest) -> TemporaryKey:
        return self.__client.post(
            TEMPORARY_KEYS_PATH, payload=request, result_type=TemporaryKey
        )

    async def create_async(self, request: CreateKeyRequest) -> TemporaryKey:
        return await self.__client.post_async(
            TEMPORARY_KEYS_PATH, payload=request, result_type=TemporaryKey
        )

    def list(self) -> List[TemporaryKey]:
        return self.__client.get(TEMPORARY_KEYS_PATH, result_type=List[TemporaryKey])

    async def list_async(self) -> List[TemporaryKey]:
        return await self.__client.get_async(
            TEMPORARY_KEYS_PATH, result_type=List[TemporaryKey]
        )

    def get(self, key_id: str) -> TemporaryKey:
        return self.__client.get(_key_path(key_id), result_type=TemporaryKey)

    async def get_async(self, key_id: str) -> TemporaryKey:
        return await self.__client.get_async(_key_path(key_id), result_type=TemporaryKey)

    def update(self, key_id: str, updates: Dict[str, Any]) -> TemporaryKey:
        return self.__client.patch(
            _key_path(key_id), payload=updates, result_type=TemporaryKey
        )

    async def update_async(self, key_id: str, updates: Dict[str, Any]) -> TemporaryKey:
        return await self.__client.patch_async(
            _key_path(key_id), payload=updates, result_type=TemporaryKey
        )

    def delete(self, key_id: str) -> None:
        self.__client.delete(_key_path(key_id))

    async def delete_async(self, key_id: str) -> None:
        await self.__client.delete_async(_key_path(key_id))


def _key_path(key_id: str) -> str:
    return f"{TEMPORARY_KEYS_PATH}/{encode_path_parameter(key_id)}"
