from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..domain import Mood

JsonSchema = Dict[str, Any]

UPDATE_DIARY = "updateDiary"


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    parameters: JsonSchema

    def as_tool(self) -> Dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


UPDATE_DIARY_TOOL = ToolSpec(
    name=UPDATE_DIARY,
    description=(
        "Creates or updates the diary entry for a specific date. Use this when the user wants to "
        "record an event, thought, or feeling into their journal."
    ),
    parameters={
        "type": "object",
        "properties": {
            "date": {
                "type": "string",
                "description": "The date of the diary entry in YYYY-MM-DD format.",
            },
            "content": {
                "type": "string",
                "description": (
                    "The full text content of the diary entry, written in a diary style (first person). "
                    "If there is existing content for this day, merge the new information naturally."
                ),
            },
            "mood": {
                "type": "string",
                "enum": [mood.value for mood in Mood],
                "description": "The mood associated with this entry.",
            },
        },
        "required": ["date", "content"],
    },
)

TOOLS = (UPDATE_DIARY_TOOL,)
