from typing import Any, Dict, List, Optional

from keywordsai_sdk.http.client import KeywordsAIHTTPClient
from keywordsai_sdk.http.entities import Prompt, PromptVersion
from keywordsai_sdk.http.utils.iterables import remove_empty_values
from keywordsai_sdk.http.utils.requests import encode_path_parameter

PROMPTS_PATH = "/api/prompts/"


class PromptsService:
    """Prompts and their versions."""

    def __init__(self, client: KeywordsAIHTTPClient):
        self.__client = client

    def create(self, name: str, description: Optional[str] = None) -> Prompt:
        payload = remove_empty_values({"name": name, "description": description})
        return self.__client.post(PROMPTS_PATH, payload=payload, result_type=Prompt)

    async def create_async(
        self, name: str, description: Optional[str] = None
    ) -> Prompt:
        payload = remove_empty_values({"name": name, "description": description})
        return await self.__client.post_async(
            PROMPTS_PATH, payload=payload, result_type=Prompt
        )

    def list(self) -> List[Prompt]:
        return self.__client.get(PROMPTS_PATH, result_type=List[Prompt])

    async def list_async(self) -> List[Prompt]:
        return await self.__client.get_async(PROMPTS_PATH, result_type=List[Prompt])

    def get(self, prompt_id: str) -> Prompt:
        return self.__client.get(_prompt_path(prompt_id), result_type=Prompt)

    async def get_async(self, prompt_id: str) -> Prompt:
        return await self.__client.get_async(
            _prompt_path(prompt_id), result_type=Prompt
        )

    def update(self, prompt_id: str, updates: Dict[str, Any]) -> Prompt:
        """Partially update a prompt.

        Only the keys present in ``updates`` are sent, an explicit ``None`` is
        sent as ``null``.
        """
        return self.__client.patch(
            _prompt_path(prompt_id), payload=updates, result_type=Prompt
        )

    async def update_async(self, prompt_id: str, updates: Dict[str, Any]) -> Prompt:
        return await self.__client.patch_async(
            _prompt_path(prompt_id), payload=updates, result_type=Prompt
        )

    def delete(self, prompt_id: str) -> None:
        self.__client.delete(_prompt_path(prompt_id))

    async def delete_async(self, prompt_id: str) -> None:
        await self.__client.delete_async(_prompt_path(prompt_id))

    def create_version(self, prompt_id: str, version: PromptVersion) -> PromptVersion:
        return self.__client.post(
            _versions_path(prompt_id), payload=version, result_type=PromptVersion
        )

    async def create_version_async(
        self, prompt_id: str, version: PromptVersion
    ) -> PromptVersion:
        return await self.__client.post_async(
            _versions_path(prompt_id), payload=version, result_type=PromptVersion
        )

    def list_versions(self, prompt_id: str) -> List[PromptVersion]:
        return self.__client.get(
            _versions_path(prompt_id), result_type=List[PromptVersion]
        )

    async def list_versions_async(self, prompt_id: str) -> List[PromptVersion]:
        return await self.__client.get_async(
            _versions_path(prompt_id), result_type=List[PromptVersion]
        )

    def get_version(self, prompt_id: str, version_id: str) -> PromptVersion:
        return self.__client.get(
            _version_path(prompt_id, version_id), result_type=PromptVersion
        )

    async def get_version_async(
        self, prompt_id: str, version_id: str
    ) -> PromptVersion:
        return await self.__client.get_async(
            _version_path(prompt_id, version_id), result_type=PromptVersion
        )

    def update_version(
        self, prompt_id: str, version_id: str, updates: Dict[str, Any]
    ) -> PromptVersion:
        return self.__client.patch(
            _version_path(prompt_id, version_id),
            payload=updates,
            result_type=PromptVersion,
        )

    async def update_version_async(
        self, prompt_id: str, version_id: str, updates: Dict[str, Any]
    ) -> PromptVersion:
        return await self.__client.patch_async(
            _version_path(prompt_id, version_id),
            payload=updates,
            result_type=PromptVersion,
        )

    def delete_version(self, prompt_id: str, version_id: str) -> None:
        self.__client.delete(_version_path(prompt_id, version_id))

    async def delete_version_async(self, prompt_id: str, version_id: str) -> None:
        await self.__client.delete_async(_version_path(prompt_id, version_id))


def _prompt_path(prompt_id: str) -> str:
    return f"{PROMPTS_PATH}{encode_path_parameter(prompt_id)}"


def _versions_path(prompt_id: str) -> str:
    return f"{_prompt_path(prompt_id)}/versions"


def _version_path(prompt_id: str, version_id: str) -> str:
    return f"{_versions_path(prompt_id)}/{encode_path_parameter(version_id)}"
