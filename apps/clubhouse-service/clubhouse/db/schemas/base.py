"""
Shared schema configuration.

Request payloads are camelCase on the wire; records returned to clients keep
the persisted snake_case column names.
"""
from datetime import date, time
from typing import Annotated, Optional
from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


class CamelInput(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Optional inputs where an empty string means "not set"
OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]
OptionalDate = Annotated[Optional[date], BeforeValidator(blank_to_none)]
OptionalTime = Annotated[Optional[time], BeforeValidator(blank_to_none)]
