# phase.py
from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from .model import WalkSpec


PHASE_KINDS = ("map", "reduce", "link")
_KIND_RE = re.compile("|".join(PHASE_KINDS), re.IGNORECASE)

JAVASCRIPT = "javascript"
ERLANG = "erlang"

# JS source | stored function {"bucket", "key"} | (module, function) | WalkSpec
PhaseFunction = Union[str, Mapping[str, Any], Sequence[str], WalkSpec]


class Phase:
    """
    A single stage of a map-reduce pipeline.

    Normally created through Job.map / Job.reduce / Job.link rather than
    directly. All fields are validated here and are read-only afterwards.
    """

    def __init__(
        self,
        kind: str,
        function: PhaseFunction = None,
        *,
        language: Optional[str] = None,
        keep: bool = False,
        arg: Any = None,
    ):
        self._kind = _normalize_kind(kind)
        self._language = language or JAVASCRIPT
        self._function, derived = _check_function(self._kind, function)
        if derived is not None:
            self._language = derived
        self._keep = bool(keep)
        self._arg = arg

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> Phase:
        """Build from an options bundle; "type" is accepted as an alias of "kind"."""
        kind = options.get("kind", options.get("type"))
        return cls(
            kind,
            options.get("function"),
            language=options.get("language"),
            keep=options.get("keep") or False,
            arg=options.get("arg"),
        )

    @property
    def kind(self) -> str:
        return self._kind

    # the store's own name for the field
    type = kind

    @property
    def function(self) -> PhaseFunction:
        return self._function

    @property
    def language(self) -> str:
        return self._language

    @property
    def keep(self) -> bool:
        return self._keep

    @property
    def arg(self) -> Any:
        return self._arg

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Wire fragment for this phase: {kind: {...}}."""
        if self._kind == "link":
            spec = WalkSpec.normalize(self._function)[0]
            body: Dict[str, Any] = {
                "bucket": spec.bucket,
                "tag": spec.tag,
                # spec-level keep wins when set, phase-level otherwise
                "keep": spec.keep or self._keep,
            }
        else:
            body = {"language": self._language, "keep": self._keep}
            fn = self._function
            if isinstance(fn, Mapping):
                body.update({str(k): v for k, v in fn.items()})
            elif isinstance(fn, str):
                body["source"] = fn
            else:
                body["module"], body["function"] = fn[0], fn[1]

        # only None and False mean "no argument"
        if self._arg is not None and self._arg is not False:
            body["arg"] = self._arg
        return {self._kind: body}

    def __repr__(self) -> str:
        return (
            f"Phase(kind={self._kind!r}, function={self._function!r}, "
            f"language={self._language!r}, keep={self._keep!r}, arg={self._arg!r})"
        )


def _normalize_kind(value: Any) -> str:
    if not _KIND_RE.fullmatch(str(value or "")):
        raise ValueError(f"phase kind must be map, reduce, or link (got {value!r})")
    return str(value).lower()


def _check_function(kind: str, value: Any) -> Tuple[PhaseFunction, Optional[str]]:
    """
    Validate a phase function for the given kind.

    Returns the stored value and the language it implies (None if it
    implies none).
    """
    if isinstance(value, WalkSpec):
        if kind != "link":
            raise ValueError("a WalkSpec is only valid as the function of a link phase")
        return value, None

    if isinstance(value, str):
        return value, JAVASCRIPT

    if isinstance(value, Mapping):
        if kind != "link" and not ("bucket" in value and "key" in value):
            raise ValueError(
                f"function must have 'bucket' and 'key' when a mapping (got {dict(value)!r})"
            )
        return dict(value), JAVASCRIPT

    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise ValueError(
                f"function must have two elements (module, function) when a sequence (got {value!r})"
            )
        return tuple(value), ERLANG

    raise ValueError(f"invalid value for function: {value!r}")
