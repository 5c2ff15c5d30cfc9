"""Schemas and relay outcomes for the completion proxy."""

from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


class CompletionRequest(BaseModel):
    """A prompt from the widget, optionally constrained to a JSON schema."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    prompt: Any = None
    isJsonOutput: Any = False
    # "schema" shadows a BaseModel attribute, hence the alias
    response_schema: Any = Field(default=None, alias="schema")

    @property
    def structured(self) -> bool:
        return bool(self.isJsonOutput and self.response_schema)


@dataclass(frozen=True)
class UpstreamResponse:
    """The model API answered; relay its status and body unchanged."""

    status_code: int
    body: Any


@dataclass(frozen=True)
class TransportFailure:
    """No upstream response was obtained."""

    reason: str


RelayOutcome = Union[UpstreamResponse, TransportFailure]
