import json
import typing
import urllib.parse
from datetime import datetime
from typing import Any, Dict, Optional, Union

from dataclasses_json import DataClassJsonMixin

from keywordsai_sdk.http.errors import (
    APIError,
    DecodingError,
    EncodingError,
    InvalidParameterError,
)
from keywordsai_sdk.http.utils.encoding import format_timestamp

MIN_KEY_LENGTH_TO_REVEAL_PREFIX = 8
API_ERROR_TEXT_FIELDS = ("error", "message", "details")


def mask_api_key(api_key: Optional[str]) -> str:
    """Mask the API key so that it can be safely logged.

    Args:
        api_key: The API key to mask.

    Returns:
        The masked API key.
    """
    if not api_key:
        return "<not set>"
    if len(api_key) < MIN_KEY_LENGTH_TO_REVEAL_PREFIX:
        return "***"
    return f"{api_key[:2]}***{api_key[-2:]}"


def deduct_api_key_from_string(value: str, api_key: Optional[str]) -> str:
    """Replace every occurrence of the API key in the string with its masked form.

    Args:
        value: The string to clean.
        api_key: The API key to remove.

    Returns:
        The string without the API key.
    """
    if not api_key:
        return value
    return value.replace(api_key, mask_api_key(api_key=api_key))


def build_url(base_url: str, path: str) -> str:
    """Join the base URL and the endpoint path with exactly one slash.

    The trailing slash of the path is preserved, as some endpoints require it.

    Args:
        base_url: The base URL of the API.
        path: The endpoint path, possibly with a query string.

    Returns:
        The full URL.
    """
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def build_headers(api_key: str, content_type: Optional[str] = None) -> Dict[str, str]:
    headers = {"Authorization": f"Bearer {api_key}"}
    if content_type is not None:
        headers["Content-Type"] = content_type
    return headers


def serialise_payload(payload: Any) -> bytes:
    """Serialise the request payload to JSON.

    Args:
        payload: Dataclass, dictionary, list or other JSON compatible value.

    Returns:
        The JSON encoded payload.

    Raises:
        EncodingError: If the payload cannot be serialised.
    """
    try:
        return json.dumps(payload_to_json_compatible(payload=payload)).encode("utf-8")
    except (TypeError, ValueError) as error:
        raise EncodingError(f"Could not serialise request body: {error}") from error


def payload_to_json_compatible(payload: Any) -> Any:
    if isinstance(payload, DataClassJsonMixin):
        return payload.to_dict(encode_json=True)
    if isinstance(payload, dict):
        return {
            key: payload_to_json_compatible(payload=value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple)):
        return [payload_to_json_compatible(payload=element) for element in payload]
    if isinstance(payload, datetime):
        return format_timestamp(value=payload)
    return payload


def parse_api_error(status_code: int, body: Union[bytes, str]) -> APIError:
    """Turn the body of an unsuccessful response into an APIError.

    The status code always comes from the HTTP response. If the body is not a
    JSON object with textual fields, the raw body becomes the error text.

    Args:
        status_code: HTTP status of the response.
        body: Raw response body.

    Returns:
        The structured error.
    """
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    try:
        error_data = json.loads(body)
    except ValueError:
        return APIError(status_code=status_code, error=body)
    if not isinstance(error_data, dict):
        return APIError(status_code=status_code, error=body)
    fields = {}
    for field_name in API_ERROR_TEXT_FIELDS:
        field_value = error_data.get(field_name)
        if field_value is not None and not isinstance(field_value, str):
            return APIError(status_code=status_code, error=body)
        fields[field_name] = field_value
    return APIError(status_code=status_code, **fields)


def decode_response_payload(content: bytes, result_type: Any) -> Any:
    """Decode the body of a successful response into the requested type.

    Args:
        content: Raw response body.
        result_type: ``bytes`` for raw content, a ``DataClassJsonMixin`` subclass,
            ``List[...]`` of such subclass, or ``dict`` / ``list`` / ``Any`` for
            plain JSON.

    Returns:
        The decoded value.

    Raises:
        DecodingError: If the body is not valid JSON or does not match the type.
    """
    if result_type is bytes:
        return content
    try:
        payload = json.loads(content)
    except ValueError as error:
        raise DecodingError(f"Could not decode response body: {error}") from error
    try:
        return convert_payload(payload=payload, result_type=result_type)
    except (KeyError, TypeError, ValueError, AttributeError) as error:
        raise DecodingError(
            f"Response body does not match expected type {result_type}: {error}"
        ) from error


def convert_payload(payload: Any, result_type: Any) -> Any:
    if result_type is Any:
        return payload
    origin = typing.get_origin(result_type)
    if origin in (list, typing.List):
        if not isinstance(payload, list):
            raise TypeError(f"expected JSON array, got {type(payload).__name__}")
        (element_type,) = typing.get_args(result_type) or (Any,)
        return [
            convert_payload(payload=element, result_type=element_type)
            for element in payload
        ]
    if isinstance(result_type, type) and issubclass(result_type, DataClassJsonMixin):
        if not isinstance(payload, dict):
            raise TypeError(f"expected JSON object, got {type(payload).__name__}")
        return result_type.from_dict(payload)
    if result_type in (dict, list) and not isinstance(payload, result_type):
        raise TypeError(
            f"expected {result_type.__name__}, got {type(payload).__name__}"
        )
    return payload


def encode_path_parameter(value: Any) -> str:
    """Percent-encode a value interpolated into an endpoint path.

    Args:
        value: The path parameter.

    Returns:
        The encoded path segment.

    Raises:
        InvalidParameterError: If the value is empty.
    """
    segment = str(value) if value is not None else ""
    if not segment:
        raise InvalidParameterError("Path parameter must not be empty.")
    return urllib.parse.quote(segment, safe="")
