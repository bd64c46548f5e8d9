# model.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Union
from urllib.parse import quote


@dataclass(frozen=True)
class Bucket:
    """A bucket reference. Used alone as a job input it means "every key in it"."""
    name: str


@dataclass(frozen=True)
class RObject:
    """A stored object, addressed by its bucket and key."""
    bucket: Bucket
    key: str


WILDCARD = "_"


@dataclass(frozen=True)
class WalkSpec:
    """
    Describes which links a link phase should follow.

    bucket/tag of "_" match anything; keep asks for the phase's results
    to be returned.
    """
    bucket: str = WILDCARD
    tag: str = WILDCARD
    keep: bool = False

    @classmethod
    def from_mapping(cls, fields: Mapping[str, Any]) -> WalkSpec:
        # "result" is the older spelling of "keep"
        keep = fields.get("result") or fields.get("keep")
        return cls.from_values(fields.get("bucket"), fields.get("tag"), keep)

    @classmethod
    def from_values(cls, bucket: Optional[str], tag: Optional[str], keep: Any) -> WalkSpec:
        return cls(
            bucket=bucket or WILDCARD,
            tag=tag or WILDCARD,
            keep=bool(keep),
        )

    @staticmethod
    def normalize(*sources: Any) -> List[WalkSpec]:
        """
        Turn walk spec sources into a list of WalkSpec.

        A source is a WalkSpec, a mapping of its fields, or three positional
        values (bucket, tag, keep). Nested lists/tuples are flattened first.
        """
        params = flatten(sources)
        specs: List[WalkSpec] = []
        while params:
            param = params.pop(0)
            if isinstance(param, WalkSpec):
                specs.append(param)
            elif isinstance(param, Mapping):
                specs.append(WalkSpec.from_mapping(param))
            elif len(params) >= 2:
                tag, keep = params.pop(0), params.pop(0)
                specs.append(WalkSpec.from_values(param, tag, keep))
            else:
                raise ValueError(
                    f"too few arguments for a walk spec: {[param, *params]!r} "
                    "(expected bucket, tag, keep)"
                )
        return specs

    def matches(self, other: Union[WalkSpec, Mapping[str, Any]]) -> bool:
        """True when other's bucket/tag fall under this spec (wildcards honoured)."""
        if isinstance(other, Mapping):
            other = WalkSpec.from_mapping(other)
        if self == other:
            return True
        return (
            self.bucket in (WILDCARD, other.bucket)
            and self.tag in (WILDCARD, other.tag)
        )

    def __str__(self) -> str:
        # link-walk URL segment: bucket,tag,keep
        bucket = quote(self.bucket, safe="") if self.bucket != WILDCARD else WILDCARD
        tag = quote(self.tag, safe="") if self.tag != WILDCARD else WILDCARD
        return f"{bucket},{tag},{'1' if self.keep else WILDCARD}"


def flatten(values: Any) -> list:
    out: list = []
    for v in values:
        if isinstance(v, (list, tuple)):
            out.extend(flatten(v))
        else:
            out.append(v)
    return out
