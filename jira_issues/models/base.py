"""Base model and wire helpers shared by all Jira resource models."""

import json
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Annotated, Any, ClassVar, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    PlainSerializer,
    PlainValidator,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    model_serializer,
)
from pydantic_core import PydanticCustomError

from jira_issues.clients.exceptions import DecodeError, ParseError

JIRA_TIME_ERROR = "jira_time"

# Validation context key set while decoding wire payloads
WIRE = "wire"

_JIRA_TIME_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d{1,9}))?"
    r"(?P<offset>[+-]\d{4})$",
)


def parse_jira_time(value: Any) -> datetime:
    """Parse a Jira timestamp such as ``2016-11-21T10:15:30.000+0100``."""
    if isinstance(value, datetime):
        return value
    match = _JIRA_TIME_RE.match(value) if isinstance(value, str) else None
    if match is None:
        raise PydanticCustomError(
            JIRA_TIME_ERROR,
            "invalid Jira timestamp {value!r}",
            {"value": value},
        )
    parsed = datetime.strptime(match["base"] + match["offset"], "%Y-%m-%dT%H:%M:%S%z")
    fraction = (match["fraction"] or "0")[:6].ljust(6, "0")
    return parsed.replace(microsecond=int(fraction))


def format_jira_time(value: datetime) -> str:
    """Format a datetime the way Jira emits timestamps."""
    millis = value.microsecond // 1000
    return f"{value.strftime('%Y-%m-%dT%H:%M:%S')}.{millis:03d}{value.strftime('%z')}"


JiraTime = Annotated[
    datetime,
    PlainValidator(parse_jira_time),
    PlainSerializer(format_jira_time, return_type=str),
]


def is_empty(value: Any) -> bool:
    """Return True for values a Jira payload leaves out: None, "", 0, False, [] and {}."""
    if value is None:
        return True
    if isinstance(value, str | list | tuple | dict):
        return len(value) == 0
    if isinstance(value, bool):
        return not value
    if isinstance(value, int | float):
        return value == 0
    return False


def dump_value(value: Any, *, mode: str = "json", by_alias: bool = True) -> Any:
    """Dump a value that may be or contain pydantic models to its wire form."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode=mode, by_alias=by_alias)
    if isinstance(value, Mapping):
        return {key: dump_value(item, mode=mode, by_alias=by_alias) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [dump_value(item, mode=mode, by_alias=by_alias) for item in value]
    return value


def _location(error: Mapping[str, Any]) -> str:
    return ".".join(str(part) for part in error.get("loc", ())) or "<root>"


def translate_validation_error(name: str, exc: ValidationError) -> DecodeError:
    """Turn a pydantic ValidationError into a DecodeError or ParseError."""
    errors = exc.errors()
    for error in errors:
        if error.get("type") == JIRA_TIME_ERROR:
            field = _location(error)
            return ParseError(f"Could not parse {name} field {field}: {error['msg']}", field=field)
    first = errors[0] if errors else {}
    field = _location(first)
    return DecodeError(
        f"Could not decode {name} field {field}: {first.get('msg', exc)}",
        field=field,
    )


def is_wire(info: ValidationInfo) -> bool:
    """Return True if the current validation decodes a wire payload."""
    return isinstance(info.context, Mapping) and bool(info.context.get(WIRE))


def validate_wire[T](adapter: TypeAdapter[T], data: Any) -> T:
    """Validate wire data by alias only, marking the context as wire input."""
    return adapter.validate_python(data, context={WIRE: True}, by_alias=True, by_name=False)


def load_json(data: str | bytes | bytearray, name: str) -> Any:
    """Decode JSON text, raising DecodeError on malformed input."""
    try:
        return json.loads(data)
    except ValueError as e:
        msg = f"Could not decode {name} payload: {e!s}"
        raise DecodeError(msg) from e


class JiraModel(BaseModel):
    """Base class for Jira REST resources.

    Fields are declared with their wire key as alias. Python construction
    accepts attribute names as well, wire payloads are matched by alias only.
    Empty members are left out of the serialized form unless listed in
    ``always_emit``.
    """

    model_config = ConfigDict(validate_by_alias=True, validate_by_name=True)

    # Attribute names that are emitted even when empty
    always_emit: ClassVar[frozenset[str]] = frozenset()

    def _omitted(self, name: str, value: Any) -> bool:
        return name not in self.always_emit and is_empty(value)

    def _drop_empty(self, data: dict[str, Any], info: SerializationInfo) -> dict[str, Any]:
        result = dict(data)
        for name, field in type(self).model_fields.items():
            key = field.alias if info.by_alias and field.alias else name
            if key in result and self._omitted(name, result[key]):
                del result[key]
        return result

    @model_serializer(mode="wrap")
    def _serialize(self, handler: SerializerFunctionWrapHandler, info: SerializationInfo) -> dict[str, Any]:
        return self._drop_empty(handler(self), info)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-compatible wire form of this resource."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Return the wire form encoded as JSON text."""
        return json.dumps(self.to_wire())

    @classmethod
    def from_wire(cls, data: Mapping[str, Any] | str | bytes | bytearray) -> Self:
        """Decode a wire object (mapping or JSON text) into this resource.

        Raises:
            DecodeError: If the payload is not a JSON object or does not match
            ParseError: If a Jira timestamp in a known field is malformed

        """
        if isinstance(data, str | bytes | bytearray):
            data = load_json(data, cls.__name__)
        if not isinstance(data, Mapping):
            msg = f"Could not decode {cls.__name__}: expected a JSON object, got {type(data).__name__}"
            raise DecodeError(msg)
        try:
            return cls.model_validate(data, context={WIRE: True}, by_alias=True, by_name=False)
        except ValidationError as e:
            raise translate_validation_error(cls.__name__, e) from e


def decode_list[M: JiraModel](model: type[M], data: Any) -> list[M]:
    """Decode a JSON array of resources, raising DecodeError on failure."""
    if isinstance(data, str | bytes | bytearray):
        data = load_json(data, model.__name__)
    if not isinstance(data, list):
        msg = f"Could not decode list of {model.__name__}: expected a JSON array, got {type(data).__name__}"
        raise DecodeError(msg)
    try:
        return validate_wire(TypeAdapter(list[model]), data)
    except ValidationError as e:
        raise translate_validation_error(model.__name__, e) from e
