"""Presentation models produced by the class selector."""

from typing import Optional

from pydantic import BaseModel, Field


class OptionRow(BaseModel):
    """One toggleable row of the selector menu."""

    class_name: str = Field(..., description="Raw class token")
    description: str = Field(default="", description="Entry description")
    swatch: Optional[str] = Field(
        default=None,
        description="Hex color found in the description, if any"
    )
    selected: bool = Field(default=False, description="Whether the token is on the block")

    model_config = {"frozen": True}


class SelectorView(BaseModel):
    """Host-independent description of the selector UI for one render."""

    label: str = Field(..., description="Field label shown above the trigger")
    trigger_text: str = Field(..., description="Summary text on the trigger")
    is_open: bool = Field(default=False)
    search_term: str = Field(default="")
    show_clear: bool = Field(
        default=False,
        description="Clear-all is offered only while open and something is selected"
    )
    options: list[OptionRow] = Field(
        default_factory=list,
        description="Visible rows; empty while closed"
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Selected predefined tokens, in predefined order"
    )

    model_config = {"frozen": True}
