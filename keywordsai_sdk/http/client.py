import asyncio
from enum import Enum
from typing import Any, List, Mapping, Optional

import aiohttp
import requests

from keywordsai_sdk.config import ClientOption, ClientSettings, resolve_client_settings
from keywordsai_sdk.http.errors import APIKeyNotProvided, TransportError
from keywordsai_sdk.http.utils.multipart import MultipartField, encode_multipart_fields
from keywordsai_sdk.http.utils.query import build_query_string
from keywordsai_sdk.http.utils.requests import (
    build_headers,
    build_url,
    decode_response_payload,
    deduct_api_key_from_string,
    mask_api_key,
    parse_api_error,
    serialise_payload,
)
from keywordsai_sdk.utils.logging import get_logger

JSON_CONTENT_TYPE = "application/json"
MIN_ERROR_STATUS_CODE = 400

logger = get_logger("http.client")


class RequestMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def wrap_errors(function: callable) -> callable:
    def decorate(self: "KeywordsAIHTTPClient", *args, **kwargs) -> Any:
        try:
            return function(self, *args, **kwargs)
        except requests.exceptions.Timeout as error:
            raise TransportError(
                f"Timeout when calling KeywordsAI API: "
                f"{deduct_api_key_from_string(str(error), api_key=self.api_key)}"
            ) from error
        except (requests.exceptions.RequestException, ConnectionError) as error:
            raise TransportError(
                f"Error with server connection: "
                f"{deduct_api_key_from_string(str(error), api_key=self.api_key)}"
            ) from error

    return decorate


def wrap_errors_async(function: callable) -> callable:
    async def decorate(self: "KeywordsAIHTTPClient", *args, **kwargs) -> Any:
        try:
            return await function(self, *args, **kwargs)
        except asyncio.TimeoutError as error:
            raise TransportError("Timeout when calling KeywordsAI API.") from error
        except (aiohttp.ClientError, ConnectionError) as error:
            raise TransportError(
                f"Error with server connection: "
                f"{deduct_api_key_from_string(str(error), api_key=self.api_key)}"
            ) from error

    return decorate


class KeywordsAIHTTPClient:
    """Shared request pipeline of the KeywordsAI SDK.

    Owns the base URL, credential, timeout and transport sessions, and runs every
    request with the same authentication, encoding and error handling. Settings
    are resolved once, on construction, and never change afterwards.
    """

    @classmethod
    def init(
        cls,
        api_key: Optional[str] = None,
        options: Optional[List[ClientOption]] = None,
    ) -> "KeywordsAIHTTPClient":
        return cls(api_key=api_key, options=options)

    def __init__(
        self,
        api_key: Optional[str] = None,
        options: Optional[List[ClientOption]] = None,
        environment: Optional[Mapping[str, str]] = None,
    ):
        self.__settings = resolve_client_settings(
            api_key=api_key,
            options=options,
            environment=environment,
        )

    @property
    def settings(self) -> ClientSettings:
        return self.__settings

    @property
    def base_url(self) -> str:
        return self.__settings.base_url

    @property
    def api_key(self) -> Optional[str]:
        return self.__settings.api_key

    @property
    def timeout(self) -> float:
        return self.__settings.timeout

    @property
    def session(self) -> requests.Session:
        return self.__settings.session

    @property
    def async_session(self) -> Optional[aiohttp.ClientSession]:
        return self.__settings.async_session

    def close(self) -> None:
        """Close the synchronous session if the client created it.

        Sessions passed in through options belong to the caller and stay open.
        """
        if self.__settings.owns_session:
            self.__settings.session.close()

    def __enter__(self) -> "KeywordsAIHTTPClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url='{self.base_url}', "
            f"api_key='{mask_api_key(self.api_key)}', "
            f"timeout={self.timeout})"
        )

    def get(
        self,
        path: str,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return self.execute(
            method=RequestMethod.GET,
            path=path,
            result_type=result_type,
            timeout=timeout,
        )

    def get_with_query(
        self,
        path: str,
        query: Any,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return self.execute(
            method=RequestMethod.GET,
            path=append_query_string(path=path, query=query),
            result_type=result_type,
            timeout=timeout,
        )

    def post(
        self,
        path: str,
        payload: Any = None,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return self.execute(
            method=RequestMethod.POST,
            path=path,
            payload=payload,
            result_type=result_type,
            timeout=timeout,
        )

    def put(
        self,
        path: str,
        payload: Any = None,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return self.execute(
            method=RequestMethod.PUT,
            path=path,
            payload=payload,
            result_type=result_type,
            timeout=timeout,
        )

    def patch(
        self,
        path: str,
        payload: Any = None,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return self.execute(
            method=RequestMethod.PATCH,
            path=path,
            payload=payload,
            result_type=result_type,
            timeout=timeout,
        )

    def delete(
        self,
        path: str,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return self.execute(
            method=RequestMethod.DELETE,
            path=path,
            result_type=result_type,
            timeout=timeout,
        )

    def execute(
        self,
        method: RequestMethod,
        path: str,
        payload: Any = None,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Execute a JSON request against the KeywordsAI API.

        Args:
            method: HTTP method of the request.
            path: Endpoint path, appended to the base URL.
            payload: Body of the request, serialised to JSON when given.
            result_type: Type to decode the response body into. ``None``
                discards the body, ``bytes`` returns it raw and sends no JSON
                ``Accept`` header.
            timeout: Timeout of this call in seconds, defaults to the
                configured one.

        Returns:
            The decoded response body, or ``None`` if no result type was given.

        Raises:
            APIKeyNotProvided: If the client has no credential.
            EncodingError: If the payload cannot be serialised.
            TransportError: On connection failures and timeouts.
            APIError: If the API responds with status >= 400.
            DecodingError: If the response body does not match ``result_type``.
        """
        _ensure_api_key_provided(api_key=self.api_key)
        data = serialise_payload(payload=payload) if payload is not None else None
        headers = build_json_request_headers(
            api_key=self.api_key, result_type=result_type
        )
        return self._send(
            method=method,
            path=path,
            data=data,
            headers=headers,
            result_type=result_type,
            timeout=timeout,
        )

    def post_multipart(
        self,
        path: str,
        fields: List[MultipartField],
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        _ensure_api_key_provided(api_key=self.api_key)
        data, content_type = encode_multipart_fields(fields=fields)
        headers = build_headers(api_key=self.api_key, content_type=content_type)
        return self._send(
            method=RequestMethod.POST,
            path=path,
            data=data,
            headers=headers,
            result_type=result_type,
            timeout=timeout,
        )

    @wrap_errors
    def _send(
        self,
        method: RequestMethod,
        path: str,
        data: Optional[bytes],
        headers: dict,
        result_type: Any,
        timeout: Optional[float],
    ) -> Any:
        url = build_url(base_url=self.base_url, path=path)
        logger.debug("Sending %s request to %s", method.value, url)
        with self.session.request(
            method.value,
            url,
            data=data,
            headers=headers,
            timeout=timeout or self.timeout,
        ) as response:
            logger.debug(
                "Received status %s for %s %s", response.status_code, method.value, url
            )
            return handle_response(
                status_code=response.status_code,
                content=response.content,
                result_type=result_type,
            )

    async def get_async(
        self,
        path: str,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self.execute_async(
            method=RequestMethod.GET,
            path=path,
            result_type=result_type,
            timeout=timeout,
        )

    async def get_with_query_async(
        self,
        path: str,
        query: Any,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self.execute_async(
            method=RequestMethod.GET,
            path=append_query_string(path=path, query=query),
            result_type=result_type,
            timeout=timeout,
        )

    async def post_async(
        self,
        path: str,
        payload: Any = None,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self.execute_async(
            method=RequestMethod.POST,
            path=path,
            payload=payload,
            result_type=result_type,
            timeout=timeout,
        )

    async def put_async(
        self,
        path: str,
        payload: Any = None,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self.execute_async(
            method=RequestMethod.PUT,
            path=path,
            payload=payload,
            result_type=result_type,
            timeout=timeout,
        )

    async def patch_async(
        self,
        path: str,
        payload: Any = None,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self.execute_async(
            method=RequestMethod.PATCH,
            path=path,
            payload=payload,
            result_type=result_type,
            timeout=timeout,
        )

    async def delete_async(
        self,
        path: str,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self.execute_async(
            method=RequestMethod.DELETE,
            path=path,
            result_type=result_type,
            timeout=timeout,
        )

    async def execute_async(
        self,
        method: RequestMethod,
        path: str,
        payload: Any = None,
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        _ensure_api_key_provided(api_key=self.api_key)
        data = serialise_payload(payload=payload) if payload is not None else None
        headers = build_json_request_headers(
            api_key=self.api_key, result_type=result_type
        )
        return await self._send_async(
            method=method,
            path=path,
            data=data,
            headers=headers,
            result_type=result_type,
            timeout=timeout,
        )

    async def post_multipart_async(
        self,
        path: str,
        fields: List[MultipartField],
        result_type: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        _ensure_api_key_provided(api_key=self.api_key)
        data, content_type = encode_multipart_fields(fields=fields)
        headers = build_headers(api_key=self.api_key, content_type=content_type)
        return await self._send_async(
            method=RequestMethod.POST,
            path=path,
            data=data,
            headers=headers,
            result_type=result_type,
            timeout=timeout,
        )

    @wrap_errors_async
    async def _send_async(
        self,
        method: RequestMethod,
        path: str,
        data: Optional[bytes],
        headers: dict,
        result_type: Any,
        timeout: Optional[float],
    ) -> Any:
        url = build_url(base_url=self.base_url, path=path)
        client_timeout = aiohttp.ClientTimeout(total=timeout or self.timeout)
        logger.debug("Sending %s request to %s", method.value, url)
        if self.async_session is not None:
            return await make_request_async(
                session=self.async_session,
                method=method,
                url=url,
                data=data,
                headers=headers,
                result_type=result_type,
                timeout=client_timeout,
            )
        async with aiohttp.ClientSession() as session:
            return await make_request_async(
                session=session,
                method=method,
                url=url,
                data=data,
                headers=headers,
                result_type=result_type,
                timeout=client_timeout,
            )


async def make_request_async(
    session: aiohttp.ClientSession,
    method: RequestMethod,
    url: str,
    data: Optional[bytes],
    headers: dict,
    result_type: Any,
    timeout: aiohttp.ClientTimeout,
) -> Any:
    async with session.request(
        method.value,
        url,
        data=data,
        headers=headers,
        timeout=timeout,
    ) as response:
        content = await response.read()
        logger.debug("Received status %s for %s %s", response.status, method.value, url)
        return handle_response(
            status_code=response.status,
            content=content,
            result_type=result_type,
        )


def handle_response(status_code: int, content: bytes, result_type: Any) -> Any:
    if status_code >= MIN_ERROR_STATUS_CODE:
        error = parse_api_error(status_code=status_code, body=content)
        logger.debug("KeywordsAI API responded with error: %r", error)
        raise error
    if result_type is None:
        return None
    return decode_response_payload(content=content, result_type=result_type)


def build_json_request_headers(api_key: str, result_type: Any) -> dict:
    headers = build_headers(api_key=api_key, content_type=JSON_CONTENT_TYPE)
    # raw binary responses, such as synthesised audio, are not negotiated as JSON
    if result_type is not bytes:
        headers["Accept"] = JSON_CONTENT_TYPE
    return headers


def append_query_string(path: str, query: Any) -> str:
    query_string = build_query_string(params=query)
    if not query_string:
        return path
    return f"{path}?{query_string}"


def _ensure_api_key_provided(api_key: Optional[str]) -> None:
    if not api_key:
        raise APIKeyNotProvided(
            "KeywordsAI API key is required. Pass `api_key` or set KEYWORDSAI_API_KEY."
        )
