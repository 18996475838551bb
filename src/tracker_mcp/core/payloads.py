"""
Typed request bodies.

Every JSON body the project client sends is one of three variants:
  - StateTransition: {"current_state": "<state>"}
  - SingleField: {"<field>": <value>}
  - FullRecord: a Story or Comment encoded with unset fields left out
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .models import Comment, Story, StoryState


class StateTransition(BaseModel):
    kind: Literal["state_transition"] = "state_transition"
    current_state: StoryState

    model_config = ConfigDict(frozen=True)

    def payload(self) -> Dict[str, Any]:
        return {"current_state": self.current_state.value}


class SingleField(BaseModel):
    kind: Literal["single_field"] = "single_field"
    field: str
    value: Any

    model_config = ConfigDict(frozen=True)

    def payload(self) -> Dict[str, Any]:
        value = self.value.value if isinstance(self.value, Enum) else self.value
        return {self.field: value}


class FullRecord(BaseModel):
    kind: Literal["full_record"] = "full_record"
    record: Union[Story, Comment]

    model_config = ConfigDict(frozen=True)

    def payload(self) -> Dict[str, Any]:
        return self.record.model_dump(mode="json", exclude_none=True)


RequestBody = Annotated[
    Union[StateTransition, SingleField, FullRecord], Field(discriminator="kind")
]


def encode_body(body: Union[StateTransition, SingleField, FullRecord]) -> bytes:
    """Render a body variant as compact JSON bytes."""
    return json.dumps(body.payload(), separators=(",", ":")).encode("utf-8")


__all__ = [
    "StateTransition",
    "SingleField",
    "FullRecord",
    "RequestBody",
    "encode_body",
]
