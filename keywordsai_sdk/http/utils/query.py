"""Query string encoding for request parameter dataclasses.

Parameter structures are dataclasses whose fields declare their query name with
:func:`query_field`. :func:`build_query_string` walks the declared fields, drops
unset and (optionally) empty values and renders the rest by type.
"""

import dataclasses
import json
import types
import typing
import urllib.parse
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple, Union

from keywordsai_sdk.http.utils.encoding import format_timestamp

QUERY_METADATA_KEY = "keywordsai_query"
SKIP_FIELD_NAME = "-"
UNION_ORIGINS = tuple(
    origin for origin in (Union, getattr(types, "UnionType", None)) if origin is not None
)


@dataclass(frozen=True)
class QueryTag:
    name: str
    omit_empty: bool = False


def query_field(name: str, omit_empty: bool = False, **kwargs) -> Any:
    """Declare a dataclass field as a query parameter.

    Args:
        name: Name of the query parameter. ``"-"`` excludes the field.
        omit_empty: Skip the parameter when the value is empty.
        **kwargs: Passed to :func:`dataclasses.field`. Defaults to ``None``
            when neither ``default`` nor ``default_factory`` is given.

    Returns:
        The dataclass field definition.
    """
    if "default" not in kwargs and "default_factory" not in kwargs:
        kwargs["default"] = None
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[QUERY_METADATA_KEY] = QueryTag(name=name, omit_empty=omit_empty)
    return dataclasses.field(metadata=metadata, **kwargs)


def build_query_string(params: Any) -> str:
    """Build an encoded query string from a parameters dataclass.

    Never raises for unsupported input: ``None`` and values that are not
    dataclass instances yield an empty string.

    Args:
        params: Dataclass instance with fields declared by :func:`query_field`.

    Returns:
        The encoded query string, parameters sorted by name.
    """
    if params is None:
        return ""
    if not dataclasses.is_dataclass(params) or isinstance(params, type):
        return ""
    pairs = []
    for field in dataclasses.fields(params):
        tag = field.metadata.get(QUERY_METADATA_KEY)
        if tag is None or not tag.name or tag.name == SKIP_FIELD_NAME:
            continue
        value = getattr(params, field.name)
        if value is None:
            continue
        # an optional field is empty only when unset
        if (
            tag.omit_empty
            and not is_optional_type(field.type)
            and is_empty_value(value=value)
        ):
            continue
        pairs.extend(render_query_parameter(name=tag.name, value=value))
    # stable sort keeps repeated parameters in their original order
    pairs.sort(key=lambda pair: pair[0])
    return "&".join(
        f"{urllib.parse.quote_plus(name)}={urllib.parse.quote_plus(value)}"
        for name, value in pairs
    )


def is_optional_type(annotation: Any) -> bool:
    if typing.get_origin(annotation) not in UNION_ORIGINS:
        return False
    return type(None) in typing.get_args(annotation)


def is_empty_value(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, Mapping)):
        return len(value) == 0
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    return False


def render_query_parameter(name: str, value: Any) -> List[Tuple[str, str]]:
    if isinstance(value, (list, tuple)):
        return [(name, render_sequence_element(value=element)) for element in value]
    rendered = render_scalar(value=value)
    if rendered is None:
        return []
    return [(name, rendered)]


def render_scalar(value: Any) -> Optional[str]:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:f}"
    if isinstance(value, datetime):
        return format_timestamp(value)
    if dataclasses.is_dataclass(value) or isinstance(value, Mapping):
        return _serialise_structure(value=value)
    return None


def render_sequence_element(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    return str(value)


def _serialise_structure(value: Any) -> Optional[str]:
    if dataclasses.is_dataclass(value):
        if hasattr(value, "to_dict"):
            value = value.to_dict(encode_json=True)
        else:
            value = dataclasses.asdict(value)
    try:
        return json.dumps(
            value, separators=(",", ":"), sort_keys=True, default=_json_default
        )
    except (TypeError, ValueError):
        return None


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_timestamp(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
