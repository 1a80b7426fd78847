"""
Column model describing one measurable field of a switch-geometry table.
"""

from pydantic import BaseModel, ConfigDict, Field


class Column(BaseModel):
    """
    A named measurement slot in a logical table.

    Attributes:
        name: Stable identifier, unique within a table ("SwitchTipCol")
        label: Human-readable caption shown by the entry UI
        hidden: Hidden columns are excluded from rule configuration
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "name": "SwitchTipCol",
                "label": "Switch tip",
                "hidden": False,
            }
        },
    )

    name: str = Field(..., min_length=1)
    label: str = ""
    hidden: bool = False

    @property
    def visible(self) -> bool:
        return not self.hidden
