"""Shared field types and validators for the resource schemas."""
from typing import Annotated, Any

from pydantic import AfterValidator, AnyHttpUrl, StringConstraints, TypeAdapter, ValidationError

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def check_url(value: str) -> str:
    """Accept ``value`` only if it parses as an http(s) URL; keep it verbatim."""
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid http(s) URL")
    return value


def reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("may not be null")
    return value


UrlStr = Annotated[str, StringConstraints(max_length=255), AfterValidator(check_url)]
ShortStr = Annotated[str, StringConstraints(max_length=255)]
LongStr = Annotated[str, StringConstraints(max_length=2550)]
