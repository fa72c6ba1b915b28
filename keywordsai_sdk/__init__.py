from keywordsai_sdk.config import (
    ClientOption,
    with_async_session,
    with_base_url,
    with_session,
    with_timeout,
)
from keywordsai_sdk.http.client import KeywordsAIHTTPClient
from keywordsai_sdk.http.entities import (
    CreateKeyRequest,
    CustomerParams,
    EmbeddingRequest,
    EmbeddingResponse,
    LogFilter,
    LogsResponse,
    Message,
    Model,
    Prompt,
    PromptVersion,
    RequestLog,
    STTRequest,
    STTResponse,
    TemporaryKey,
    Thread,
    TTSRequest,
    Usage,
)
from keywordsai_sdk.http.errors import (
    APIError,
    APIKeyNotProvided,
    DecodingError,
    EncodingError,
    InvalidParameterError,
    KeywordsAIClientError,
    TransportError,
)
from keywordsai_sdk.sdk import KeywordsAI

from keywordsai_sdk.version import __version__
