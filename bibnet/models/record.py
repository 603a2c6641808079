# bibnet/models/record.py

from __future__ import annotations

from typing import Any, Callable, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

Normalizer = Callable[[str], str]


class Record(BaseModel):
    """
    One bibliographic record (a paper).

    Fields
    ------
    authors:
        Normalized author names, de-duplicated within the record.
    keywords:
        Normalized keywords, de-duplicated within the record.
    title, venue, year:
        Descriptive metadata; not used for counting.

    Both label sets must be non-empty after normalization. Build records
    from raw JSON with `Record.from_json` so the label normalizer is applied
    before de-duplication.
    """

    model_config = ConfigDict(frozen=True)

    authors: FrozenSet[str]
    keywords: FrozenSet[str]
    title: Optional[str] = None
    venue: Optional[str] = None
    year: Optional[int] = None

    @field_validator("authors", "keywords", mode="before")
    @classmethod
    def _normalize_labels(cls, value: Any, info: ValidationInfo) -> Any:
        # Non-string items are left for pydantic to reject with a proper message.
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError("must be an array of strings")
        normalizer: Optional[Normalizer] = (info.context or {}).get("normalizer")
        if normalizer is None or not all(isinstance(v, str) for v in value):
            return value
        return [normalizer(v) for v in value]

    @field_validator("authors", "keywords")
    @classmethod
    def _non_empty(cls, value: FrozenSet[str], info: ValidationInfo) -> FrozenSet[str]:
        if not value:
            raise ValueError(f"{info.field_name} must not be empty")
        if any(not label.strip() for label in value):
            raise ValueError(f"{info.field_name} must not contain blank entries")
        return value

    @classmethod
    def from_json(cls, obj: Any, normalizer: Optional[Normalizer] = None) -> "Record":
        """
        Validate a raw JSON object into a Record.

        Raises pydantic.ValidationError when the object is not a mapping or a
        required field is missing or has the wrong shape.
        """
        return cls.model_validate(obj, context={"normalizer": normalizer})
