"""
Pydantic schemas for the singleton homepage sections.

A section (e.g. the health benefits panel) has a header and an ordered
list of items.  Every item must carry a ``label`` and a ``value``;
presentation extras such as ``icon``, ``description`` or
``base_color`` are kept as given.  Item ``id`` values are assigned by
the store on every save and are never taken from the client.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr, field_validator


class SectionItem(BaseModel):
    """A single card of a section."""

    model_config = ConfigDict(extra="allow")

    label: str
    value: Union[StrictStr, StrictInt, StrictFloat]

    @field_validator("label")
    @classmethod
    def label_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("label must not be empty")
        return v

    @field_validator("value")
    @classmethod
    def value_not_blank(cls, v: Union[str, int, float]) -> Union[str, int, float]:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("value must not be empty")
        return v


class SectionItemRead(SectionItem):
    id: str


class SectionUpdate(BaseModel):
    """Partial update of a section.

    Only fields present in the request are applied.  ``items`` is taken
    as raw objects so the service can report which entry is malformed.
    """

    title: Optional[str] = None
    subtitle: Optional[str] = None
    is_active: Optional[bool] = None
    items: Optional[List[Any]] = None


class SectionRead(BaseModel):
    id: str
    title: str = ""
    subtitle: str = ""
    is_active: bool = True
    items: List[SectionItemRead] = []
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
