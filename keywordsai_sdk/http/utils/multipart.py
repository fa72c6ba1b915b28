from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from requests_toolbelt import MultipartEncoder

from keywordsai_sdk.http.errors import EncodingError, InvalidParameterError

FILE_CONTENT_TYPE = "application/octet-stream"

MultipartPayload = Union[str, Tuple[str, bytes, str]]


@dataclass(frozen=True)
class MultipartField:
    """Single field of a multipart form.

    Exactly one of ``value`` (text field) or ``data`` (file field) must be given.
    File fields also require ``file_name``.

    Attributes:
        name: Name of the form field.
        value: Text content of the field.
        file_name: Name of the uploaded file.
        data: Raw file content, written verbatim.
    """

    name: str
    value: Optional[str] = None
    file_name: Optional[str] = None
    data: Optional[bytes] = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.data is None):
            raise InvalidParameterError(
                f"Multipart field `{self.name}` must define exactly one of text value or file data."
            )
        if self.data is not None and not self.file_name:
            raise InvalidParameterError(
                f"Multipart file field `{self.name}` requires a file name."
            )

    @classmethod
    def text(cls, name: str, value: str) -> "MultipartField":
        return cls(name=name, value=value)

    @classmethod
    def file(cls, name: str, file_name: str, data: bytes) -> "MultipartField":
        return cls(name=name, file_name=file_name, data=data)

    @property
    def is_file(self) -> bool:
        return self.data is not None

    def to_encoder_payload(self) -> MultipartPayload:
        if self.is_file:
            # fixed content type, file content is never sniffed
            return self.file_name, self.data, FILE_CONTENT_TYPE
        return self.value


def encode_multipart_fields(fields: List[MultipartField]) -> Tuple[bytes, str]:
    """Encode fields into an in-memory ``multipart/form-data`` body.

    Args:
        fields: Fields to encode, written in the given order.

    Returns:
        Tuple of the complete body and its content type, including the boundary.

    Raises:
        EncodingError: If the body could not be built.
    """
    try:
        encoder = MultipartEncoder(
            fields=[(field.name, field.to_encoder_payload()) for field in fields]
        )
        return encoder.to_string(), encoder.content_type
    except (TypeError, ValueError, OSError) as error:
        raise EncodingError(f"Could not encode multipart body: {error}") from error
