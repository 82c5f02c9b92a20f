"""Shared model configuration and result envelopes."""

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys (the JSON contract)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        """Dump to a JSON-ready dict using camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ContentModel(CamelModel):
    """Domain record. Frozen once built; updates go through ``model_copy``."""
    model_config = ConfigDict(frozen=True)


class ValidationError(CamelModel):
    """A single field-level problem reported by the validator."""
    field: str
    message: str
    value: Optional[Any] = None

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ParseResult(CamelModel, Generic[T]):
    """Uniform success/data/errors envelope returned instead of raising."""
    success: bool
    data: Optional[T] = None
    errors: List[ValidationError] = Field(default_factory=list)

    @classmethod
    def ok(cls, data: T) -> "ParseResult[T]":
        return cls(success=True, data=data, errors=[])

    @classmethod
    def fail(cls, errors: List[ValidationError], data: Optional[T] = None) -> "ParseResult[T]":
        return cls(success=False, data=data, errors=list(errors))

    @classmethod
    def error(cls, field: str, message: str, value: Any = None) -> "ParseResult[T]":
        """Failure with exactly one error entry."""
        return cls.fail([ValidationError(field=field, message=message, value=value)])


class SkippedRecord(CamelModel):
    """A candidate record the extractor dropped, with the reasons why."""
    kind: str
    title: str = ""
    reasons: List[str] = Field(default_factory=list)


class Extraction(CamelModel, Generic[T]):
    """Records an extractor produced plus the candidates it skipped."""
    records: List[T] = Field(default_factory=list)
    skipped: List[SkippedRecord] = Field(default_factory=list)
