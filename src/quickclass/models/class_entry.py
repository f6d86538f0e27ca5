"""ClassEntry model: one predefined CSS class and its description."""

from typing import Any, Iterable

from pydantic import BaseModel, Field


class ClassEntry(BaseModel):
    """A curated CSS class token with an optional free-text description.

    Identity is positional (index in the owning list); duplicate class
    names are allowed. On the wire the class name travels under the key
    ``class``.
    """

    class_name: str = Field(
        default="",
        alias="class",
        description="CSS class token (normalized on save, may be raw while editing)"
    )

    description: str = Field(
        default="",
        description="Free text; may embed a #RRGGBB or #RGB color used for the swatch"
    )

    model_config = {
        "frozen": False,  # Page edits write into entries
        "populate_by_name": True,
        "extra": "ignore",
    }

    def to_payload(self) -> dict[str, str]:
        """Serialize using the wire key names ({"class", "description"})."""
        return self.model_dump(by_alias=True)


ClassList = list[ClassEntry]


def coerce_entry(item: Any) -> ClassEntry:
    """Build a ClassEntry from an entry or a {"class", "description"} mapping.

    ClassEntry inputs are copied so callers never share instances with the
    store.
    """
    if isinstance(item, ClassEntry):
        return item.model_copy()
    return ClassEntry.model_validate(item)


def parse_class_list(items: Iterable[Any]) -> ClassList:
    """Parse a JSON-decoded list of class mappings, skipping non-mappings."""
    return [
        ClassEntry.model_validate(item)
        for item in items
        if isinstance(item, dict)
    ]
