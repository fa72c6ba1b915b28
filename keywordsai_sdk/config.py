import os
from dataclasses import dataclass, replace
from typing import Callable, List, Mapping, Optional

import aiohttp
import requests

from keywordsai_sdk.http.errors import InvalidParameterError

DEFAULT_BASE_URL = "https://api.keywordsai.co"
DEFAULT_TIMEOUT = 30.0

API_KEY_ENV = "KEYWORDSAI_API_KEY"
BASE_URL_ENV = "KEYWORDS_BASE_URL"

MAX_LOGS_BATCH_SIZE = 5000


@dataclass(frozen=True)
class ClientSettings:
    """Resolved configuration of the HTTP client.

    Attributes:
        api_key: Bearer credential sent with every request.
        base_url: Root URL of the KeywordsAI API.
        timeout: Default transport timeout in seconds.
        session: Session used for synchronous requests.
        async_session: Session used for asynchronous requests. When not given,
            a short-lived session is opened for each call.
        owns_session: Whether ``session`` was created during resolution, in which
            case the client is responsible for closing it.
    """

    api_key: Optional[str]
    base_url: str
    timeout: float = DEFAULT_TIMEOUT
    session: Optional[requests.Session] = None
    async_session: Optional[aiohttp.ClientSession] = None
    owns_session: bool = False


ClientOption = Callable[[ClientSettings], ClientSettings]


def with_base_url(base_url: str) -> ClientOption:
    def apply(settings: ClientSettings) -> ClientSettings:
        return replace(settings, base_url=base_url)

    return apply


def with_timeout(timeout: float) -> ClientOption:
    if timeout <= 0:
        raise InvalidParameterError(
            f"Timeout must be a positive number of seconds, got {timeout}."
        )

    def apply(settings: ClientSettings) -> ClientSettings:
        return replace(settings, timeout=timeout)

    return apply


def with_session(session: requests.Session) -> ClientOption:
    def apply(settings: ClientSettings) -> ClientSettings:
        return replace(settings, session=session)

    return apply


def with_async_session(session: aiohttp.ClientSession) -> ClientOption:
    def apply(settings: ClientSettings) -> ClientSettings:
        return replace(settings, async_session=session)

    return apply


def resolve_client_settings(
    api_key: Optional[str] = None,
    options: Optional[List[ClientOption]] = None,
    environment: Optional[Mapping[str, str]] = None,
) -> ClientSettings:
    """Resolve client settings from arguments, environment and options.

    The layers are applied in a fixed order: the explicit ``api_key`` argument,
    then the environment for whatever is still missing, then the options, which
    override unconditionally.

    Args:
        api_key: Explicit credential. Empty values count as missing.
        options: Option callables applied last, in order.
        environment: Mapping consulted instead of ``os.environ``.

    Returns:
        ClientSettings: Settings with a session always present.
    """
    if environment is None:
        environment = os.environ
    if not api_key:
        api_key = environment.get(API_KEY_ENV) or None
    settings = ClientSettings(
        api_key=api_key,
        base_url=environment.get(BASE_URL_ENV) or DEFAULT_BASE_URL,
    )
    for option in options or []:
        settings = option(settings)
    if settings.session is None:
        settings = replace(settings, session=requests.Session(), owns_session=True)
    return settings
