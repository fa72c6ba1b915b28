from typing import Any, Dict, List, Optional

from keywordsai_sdk.config import MAX_LOGS_BATCH_SIZE
from keywordsai_sdk.http.client import KeywordsAIHTTPClient
from keywordsai_sdk.http.entities import (
    BatchRequestLogsPayload,
    LogFilter,
    LogsResponse,
    RequestLog,
    Thread,
    ThreadFilter,
)
from keywordsai_sdk.http.errors import InvalidParameterError
from keywordsai_sdk.http.utils.requests import encode_path_parameter

REQUEST_LOGS_PATH = "/api/request-logs"
CREATE_REQUEST_LOG_PATH = "/api/request-logs/create/"
BATCH_CREATE_REQUEST_LOGS_PATH = "/api/request-logs/batch/create"
THREADS_PATH = "/api/threads"


class LogsService:
    """Request logs and conversation threads."""

    def __init__(self, client: KeywordsAIHTTPClient):
        self.__client = client

    def create(self, log: RequestLog) -> None:
        self.__client.post(CREATE_REQUEST_LOG_PATH, payload=log)

    async def create_async(self, log: RequestLog) -> None:
        await self.__client.post_async(CREATE_REQUEST_LOG_PATH, payload=log)

    def batch_create(self, logs: List[RequestLog]) -> None:
        """Submit many request logs in one call.

        Args:
            logs: Logs to submit, at most 5000.

        Raises:
            InvalidParameterError: If the batch is too large. Nothing is sent then.
        """
        payload = _build_batch_payload(logs=logs)
        self.__client.post(BATCH_CREATE_REQUEST_LOGS_PATH, payload=payload)

    async def batch_create_async(self, logs: List[RequestLog]) -> None:
        payload = _build_batch_payload(logs=logs)
        await self.__client.post_async(BATCH_CREATE_REQUEST_LOGS_PATH, payload=payload)

    def list(self, log_filter: Optional[LogFilter] = None) -> LogsResponse:
        return self.__client.get_with_query(
            REQUEST_LOGS_PATH, query=log_filter, result_type=LogsResponse
        )

    async def list_async(self, log_filter: Optional[LogFilter] = None) -> LogsResponse:
        return await self.__client.get_with_query_async(
            REQUEST_LOGS_PATH, query=log_filter, result_type=LogsResponse
        )

    def get(self, log_id: str) -> RequestLog:
        return self.__client.get(_request_log_path(log_id), result_type=RequestLog)

    async def get_async(self, log_id: str) -> RequestLog:
        return await self.__client.get_async(
            _request_log_path(log_id), result_type=RequestLog
        )

    def update(self, log_id: str, updates: Dict[str, Any]) -> None:
        self.__client.patch(_request_log_path(log_id), payload=updates)

    async def update_async(self, log_id: str, updates: Dict[str, Any]) -> None:
        await self.__client.patch_async(_request_log_path(log_id), payload=updates)

    def list_threads(self, customer_identifier: Optional[str] = None) -> List[Thread]:
        return self.__client.get_with_query(
            THREADS_PATH,
            query=ThreadFilter(customer_identifier=customer_identifier),
            result_type=List[Thread],
        )

    async def list_threads_async(
        self, customer_identifier: Optional[str] = None
    ) -> List[Thread]:
        return await self.__client.get_with_query_async(
            THREADS_PATH,
            query=ThreadFilter(customer_identifier=customer_identifier),
            result_type=List[Thread],
        )


def _build_batch_payload(logs: List[RequestLog]) -> BatchRequestLogsPayload:
    if len(logs) > MAX_LOGS_BATCH_SIZE:
        raise InvalidParameterError(
            f"Batch size {len(logs)} exceeds maximum of {MAX_LOGS_BATCH_SIZE} logs."
        )
    return BatchRequestLogsPayload(logs=list(logs))


def _request_log_path(log_id: str) -> str:
    return f"{REQUEST_LOGS_PATH}/{encode_path_parameter(log_id)}"
