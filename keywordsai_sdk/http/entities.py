from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from dataclasses_json import DataClassJsonMixin, config

from keywordsai_sdk.http.utils.encoding import (
    encode_optional_timestamp,
    format_timestamp,
    parse_timestamp,
)
from keywordsai_sdk.http.utils.query import query_field


def optional_field(default: Any = None) -> Any:
    """Field left out of the JSON payload while it holds ``None``."""
    return field(default=default, metadata=config(exclude=_is_none))


def timestamp_field(required: bool = False) -> Any:
    """Field holding a datetime, sent and received as RFC 3339 text."""
    if required:
        return field(
            metadata=config(encoder=format_timestamp, decoder=parse_timestamp)
        )
    metadata = config(
        encoder=encode_optional_timestamp,
        decoder=parse_timestamp,
        exclude=_is_none,
    )
    return field(default=None, metadata=metadata)


def _is_none(value: Any) -> bool:
    return value is None


@dataclass
class FunctionCall(DataClassJsonMixin):
    name: str
    arguments: str


@dataclass
class ToolCall(DataClassJsonMixin):
    id: str
    type: str
    function: FunctionCall


@dataclass
class Message(DataClassJsonMixin):
    """Dataclass for a chat message.

    Attributes:
        role: Role of the author of the message.
        content: Text or list of content parts.
        name: Optional name of the author.
    """

    role: str
    content: Any = None
    name: Optional[str] = optional_field()


@dataclass
class Usage(DataClassJsonMixin):
    prompt_tokens: Optional[int] = optional_field()
    completion_tokens: Optional[int] = optional_field()
    total_tokens: Optional[int] = optional_field()


@dataclass
class CustomerParams(DataClassJsonMixin):
    customer_identifier: str
    metadata: Optional[Dict[str, Any]] = optional_field()


@dataclass
class RequestLog(DataClassJsonMixin):
    """Dataclass for a logged LLM request.

    Attributes:
        model: Name of the model that served the request.
        prompt_messages: Messages sent to the model.
        completion_message: Message returned by the model.
        customer_params: Identification of the end customer.
        prompt_tokens: Number of tokens in the prompt.
        completion_tokens: Number of tokens in the completion.
        cost: Cost of the request in USD.
        latency: Latency of the request.
        failed: Whether the request failed.
        status_code: HTTP status returned by the provider.
        error: Error reported by the provider.
        timestamp: Time of the request.
        usage: Token usage summary.
        tool_calls: Tool calls requested by the model.
        metadata: Arbitrary metadata attached to the log.
        extra_headers: Extra headers sent to the provider.
        request_params: Parameters of the request.
        provider: Name of the model provider.
        stream: Whether the response was streamed.
        category: Category of the log.
        tags: Tags attached to the log.
    """

    model: str
    prompt_messages: List[Message] = field(default_factory=list)
    completion_message: Optional[Message] = optional_field()
    customer_params: Optional[CustomerParams] = optional_field()
    prompt_tokens: Optional[int] = optional_field()
    completion_tokens: Optional[int] = optional_field()
    cost: Optional[float] = optional_field()
    latency: Optional[int] = optional_field()
    failed: Optional[bool] = optional_field()
    status_code: Optional[int] = optional_field()
    error: Optional[str] = optional_field()
    timestamp: Optional[datetime] = timestamp_field()
    usage: Optional[Usage] = optional_field()
    tool_calls: Optional[List[ToolCall]] = optional_field()
    metadata: Optional[Dict[str, Any]] = optional_field()
    extra_headers: Optional[Dict[str, str]] = optional_field()
    request_params: Optional[Dict[str, Any]] = optional_field()
    provider: Optional[str] = optional_field()
    stream: Optional[bool] = optional_field()
    category: Optional[str] = optional_field()
    tags: Optional[List[str]] = optional_field()


@dataclass
class BatchRequestLogsPayload(DataClassJsonMixin):
    logs: List[RequestLog]


@dataclass(frozen=True)
class LogFilter:
    """Query parameters for listing request logs.

    Attributes:
        model: Only logs of this model.
        failed: Only failed (or successful) logs.
        category: Only logs of this category.
        customer_identifier: Only logs of this customer.
        start_time: Only logs newer than this time.
        end_time: Only logs older than this time.
        tags: Only logs carrying these tags.
        limit: Maximum number of logs to return.
        offset: Number of logs to skip.
    """

    model: Optional[str] = query_field("model", omit_empty=True)
    failed: Optional[bool] = query_field("failed")
    category: Optional[str] = query_field("category", omit_empty=True)
    customer_identifier: Optional[str] = query_field(
        "customer_identifier", omit_empty=True
    )
    start_time: Optional[datetime] = query_field("start_time")
    end_time: Optional[datetime] = query_field("end_time")
    tags: Optional[List[str]] = query_field("tags", omit_empty=True)
    limit: Optional[int] = query_field("limit", omit_empty=True)
    offset: Optional[int] = query_field("offset", omit_empty=True)


@dataclass
class LogsResponse(DataClassJsonMixin):
    logs: List[RequestLog] = field(default_factory=list)
    total_count: int = 0
    next_offset: Optional[int] = optional_field()


@dataclass(frozen=True)
class ThreadFilter:
    customer_identifier: Optional[str] = query_field(
        "customer_identifier", omit_empty=True
    )


@dataclass
class Thread(DataClassJsonMixin):
    id: str
    customer_identifier: str = ""
    messages: List[Message] = field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = optional_field()
    created_at: Optional[datetime] = timestamp_field()
    updated_at: Optional[datetime] = timestamp_field()


@dataclass
class Prompt(DataClassJsonMixin):
    id: str
    name: str
    description: Optional[str] = optional_field()
    created_at: Optional[datetime] = timestamp_field()
    updated_at: Optional[datetime] = timestamp_field()


@dataclass
class PromptVersion(DataClassJsonMixin):
    """Dataclass for a version of a prompt.

    Server assigned fields (``id``, ``prompt_id``, ``version`` and timestamps)
    are optional, so the same dataclass describes new versions.

    Attributes:
        name: Name of the version.
        template: Template of the prompt.
        model: Model the version targets.
        parameters: Model parameters of the version.
        is_active: Whether the version is the active one.
        id: Identifier of the version.
        prompt_id: Identifier of the prompt the version belongs to.
        version: Sequential number of the version.
        created_at: Creation time.
        updated_at: Last modification time.
    """

    name: str
    template: str
    model: Optional[str] = optional_field()
    parameters: Optional[Dict[str, Any]] = optional_field()
    is_active: bool = False
    id: Optional[str] = optional_field()
    prompt_id: Optional[str] = optional_field()
    version: Optional[int] = optional_field()
    created_at: Optional[datetime] = timestamp_field()
    updated_at: Optional[datetime] = timestamp_field()


@dataclass
class Model(DataClassJsonMixin):
    id: str
    name: str
    provider: str = ""
    input_cost: float = 0.0
    output_cost: float = 0.0
    max_tokens: int = 0
    context_window: int = 0
    supported_modes: List[str] = field(default_factory=list)
    is_available: bool = False


@dataclass
class TemporaryKey(DataClassJsonMixin):
    id: str
    key: str
    name: Optional[str] = optional_field()
    expires_at: Optional[datetime] = timestamp_field()
    created_at: Optional[datetime] = timestamp_field()
    is_active: bool = False
    usage_limit: Optional[int] = optional_field()
    usage_count: int = 0
    allowed_models: Optional[List[str]] = optional_field()
    allowed_endpoints: Optional[List[str]] = optional_field()
    metadata: Optional[Dict[str, Any]] = optional_field()


@dataclass
class CreateKeyRequest(DataClassJsonMixin):
    """Dataclass for a temporary key creation request.

    Attributes:
        expires_at: Expiry time of the key.
        name: Name of the key.
        usage_limit: Maximum number of requests the key may serve.
        allowed_models: Models the key may call.
        allowed_endpoints: Endpoints the key may call.
        metadata: Arbitrary metadata attached to the key.
    """

    expires_at: datetime = timestamp_field(required=True)
    name: Optional[str] = optional_field()
    usage_limit: Optional[int] = optional_field()
    allowed_models: Optional[List[str]] = optional_field()
    allowed_endpoints: Optional[List[str]] = optional_field()
    metadata: Optional[Dict[str, Any]] = optional_field()


@dataclass
class TTSRequest(DataClassJsonMixin):
    model: str
    input: str
    voice: str
    response_format: Optional[str] = optional_field()
    speed: Optional[float] = optional_field()


@dataclass
class STTRequest(DataClassJsonMixin):
    model: str
    response_format: Optional[str] = optional_field()
    language: Optional[str] = optional_field()
    temperature: Optional[float] = optional_field()
    prompt: Optional[str] = optional_field()


@dataclass
class STTResponse(DataClassJsonMixin):
    text: str
    language: Optional[str] = optional_field()
    duration: Optional[float] = optional_field()
    metadata: Optional[Dict[str, Any]] = optional_field()


@dataclass
class EmbeddingRequest(DataClassJsonMixin):
    model: str
    input: Any
    encoding_format: Optional[str] = optional_field()
    dimensions: Optional[int] = optional_field()


@dataclass
class EmbeddingData(DataClassJsonMixin):
    embedding: List[float]
    index: int = 0
    object: str = "embedding"


@dataclass
class EmbeddingResponse(DataClassJsonMixin):
    data: List[EmbeddingData] = field(default_factory=list)
    model: str = ""
    object: str = "list"
    usage: Usage = field(default_factory=Usage)
