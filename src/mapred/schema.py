"""Pydantic models for the document POSTed to the map-reduce endpoint."""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator

# -------------------- Phases --------------------

class MapReducePhase(BaseModel):
    # stored-function descriptors may add their own fields
    model_config = ConfigDict(extra="allow")

    language: Literal["javascript", "erlang"]
    keep: bool = False
    source: str | None = None
    module: str | None = None
    function: str | None = None
    bucket: str | None = None
    key: str | None = None
    arg: Any = None

    @model_validator(mode="after")
    def _has_function(self) -> "MapReducePhase":
        if self.language == "erlang":
            if not (self.module and self.function):
                raise ValueError("erlang phases need 'module' and 'function'")
        elif self.source is None and not (self.bucket and self.key):
            raise ValueError("javascript phases need 'source' or 'bucket' and 'key'")
        return self

class LinkPhase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    bucket: str = "_"
    tag: str = "_"
    keep: bool = False
    arg: Any = None

class QueryEntry(RootModel[dict[str, Union[MapReducePhase, LinkPhase]]]):
    """One element of "query": a single-key object keyed by the phase kind."""

    @model_validator(mode="before")
    @classmethod
    def _single_phase(cls, data: Any) -> Any:
        if not isinstance(data, dict) or len(data) != 1:
            raise ValueError("each query entry must be an object with exactly one key")
        (kind, body), = data.items()
        if kind in ("map", "reduce"):
            return {kind: MapReducePhase.model_validate(body)}
        if kind == "link":
            return {kind: LinkPhase.model_validate(body)}
        raise ValueError(f"unknown phase kind {kind!r} (expected map, reduce, or link)")

    @property
    def kind(self) -> str:
        return next(iter(self.root))

# -------------------- Document --------------------

class WireDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    inputs: Union[str, list[list[Any]]]
    query: list[QueryEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _key_inputs(self) -> "WireDocument":
        if isinstance(self.inputs, list):
            for entry in self.inputs:
                if len(entry) not in (2, 3):
                    raise ValueError(f"inputs entries must be [bucket, key] or [bucket, key, keydata], got {entry!r}")
        return self

def validate_document(doc: dict[str, Any]) -> WireDocument:
    """Check a rendered (or hand-written) document. Raises pydantic.ValidationError."""
    return WireDocument.model_validate(doc)
