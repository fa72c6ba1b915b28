from typing import Optional


class KeywordsAIClientError(Exception):
    """Base class for KeywordsAI client errors."""

    pass


class TransportError(KeywordsAIClientError):
    """Error for connection failures and timeouts."""

    pass


class EncodingError(KeywordsAIClientError):
    """Error for request bodies that could not be encoded."""

    pass


class DecodingError(KeywordsAIClientError):
    """Error for successful responses whose body does not match the expected shape."""

    pass


class APIKeyNotProvided(KeywordsAIClientError):
    """Error for API key not provided."""

    pass


class InvalidParameterError(KeywordsAIClientError):
    """Error for invalid parameter."""

    pass


class APIError(KeywordsAIClientError):
    """Error returned by the KeywordsAI API for responses with status >= 400.

    Attributes:
        status_code: HTTP status of the response.
        error: Machine error code or text reported by the API.
        message: Human readable message reported by the API.
        details: Additional details reported by the API.
    """

    def __init__(
        self,
        status_code: int,
        error: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.__status_code = status_code
        self.__error = error
        self.__message = message
        self.__details = details
        super().__init__(self.describe())

    @property
    def status_code(self) -> int:
        """The HTTP status code of the response."""
        return self.__status_code

    @property
    def error(self) -> Optional[str]:
        """The machine error code or text."""
        return self.__error

    @property
    def message(self) -> Optional[str]:
        """The human readable message."""
        return self.__message

    @property
    def details(self) -> Optional[str]:
        """Additional details."""
        return self.__details

    def describe(self) -> str:
        # message takes precedence over error even if the API sends both
        if self.__message:
            return f"KeywordsAI API error (status {self.__status_code}): {self.__message}"
        if self.__error:
            return f"KeywordsAI API error (status {self.__status_code}): {self.__error}"
        return f"KeywordsAI API error (status {self.__status_code})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"status_code={self.__status_code}, "
            f"error={self.__error!r}, "
            f"message={self.__message!r}, "
            f"details={self.__details!r})"
        )

    def __str__(self) -> str:
        return self.describe()
