from typing import List, Mapping, Optional

from keywordsai_sdk.config import ClientOption
from keywordsai_sdk.http.client import KeywordsAIHTTPClient
from keywordsai_sdk.services.integrations import IntegrationsService
from keywordsai_sdk.services.keys import KeysService
from keywordsai_sdk.services.logs import LogsService
from keywordsai_sdk.services.models import ModelsService
from keywordsai_sdk.services.prompts import PromptsService


class KeywordsAI:
    """All-in-one entry point with every resource service wired to one client.

    Usage:
        sdk = KeywordsAI()  # uses KEYWORDSAI_API_KEY
        sdk = KeywordsAI(api_key="my-api-key")
        sdk = KeywordsAI(options=[with_timeout(10)])
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        options: Optional[List[ClientOption]] = None,
        environment: Optional[Mapping[str, str]] = None,
    ):
        self.client = KeywordsAIHTTPClient(
            api_key=api_key,
            options=options,
            environment=environment,
        )
        self.logs = LogsService(client=self.client)
        self.prompts = PromptsService(client=self.client)
        self.models = ModelsService(client=self.client)
        self.keys = KeysService(client=self.client)
        self.integrations = IntegrationsService(client=self.client)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "KeywordsAI":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
