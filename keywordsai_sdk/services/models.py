from typing import List

from keywordsai_sdk.http.client import KeywordsAIHTTPClient
from keywordsai_sdk.http.entities import Model

MODELS_PATH = "/api/models"


class ModelsService:
    def __init__(self, client: KeywordsAIHTTPClient):
        self.__client = client

    def list(self) -> List[Model]:
        return self.__client.get(MODELS_PATH, result_type=List[Model])

    async def list_async(self) -> List[Model]:
        return await self.__client.get_async(MODELS_PATH, result_type=List[Model])
