# job.py
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Tuple, Union

from .model import Bucket, RObject, WalkSpec, flatten
from .phase import Phase


# phase-only options; everything else given to link() without a
# positional spec describes the walk spec itself
LINK_PHASE_OPTIONS = ("type", "function", "language", "arg")
# keys that mark a trailing mapping as an options bundle
PHASE_OPTIONS = ("type", "function", "language", "keep", "arg")

KeyInput = List[Any]  # [bucket, key] or [bucket, key, keydata]
_NO_KEYDATA = object()
Inputs = Union[str, List[KeyInput]]


class Job:
    """
    A map-reduce job: the inputs to run over and an ordered list of phases.

    Build it up with add() and map()/reduce()/link() (all chainable), then
    hand to_dict() or to_json() to whatever submits it.

        job = (
            Job()
            .add("logs", "2024-01-01")
            .map("function(v){ return [v.key]; }")
            .reduce(["riak_kv_mapreduce", "reduce_sort"], keep=True)
        )
    """

    def __init__(self):
        self._keys: List[KeyInput] = []
        self._inputs: Inputs = self._keys
        self._phases: List[Phase] = []

    # -----------------------------------------------------------------
    # Inputs
    # -----------------------------------------------------------------

    @property
    def inputs(self) -> Inputs:
        """The current inputs: a bucket name / literal string, or the key list."""
        return self._inputs

    @inputs.setter
    def inputs(self, value: Inputs) -> None:
        if isinstance(value, str):
            self._inputs = value
        else:
            for entry in value:
                if not isinstance(entry, (list, tuple)) or len(entry) not in (2, 3):
                    raise ValueError(
                        f"inputs entries must be (bucket, key) or (bucket, key, keydata), got {entry!r}"
                    )
            self._keys = [list(entry) for entry in value]
            self._inputs = self._keys

    @property
    def keys(self) -> List[KeyInput]:
        """Every bucket/key entry added so far, whether or not it is the active input."""
        return self._keys

    def add(self, *params: Any) -> Job:
        """
        Add or replace inputs.

            add(bucket)                    all keys in bucket (replaces inputs)
            add("literal")                 pass-through input (replaces inputs)
            add(robject)                   the object's bucket/key
            add(bucket, key[, keydata])    a single key, optionally with keydata

        Nested lists/tuples are flattened, so add(["b", "k"]) works too.
        """
        args = flatten(params)

        if len(args) == 1:
            p = args[0]
            if isinstance(p, str):
                return self._replace(p)
            if _is_object(p):
                return self.add_object(p)
            if _is_bucket(p):
                return self.add_bucket(p)
            raise ValueError(f"unsupported input: {p!r}")

        if len(args) in (2, 3):
            return self.add_key(*args)

        raise ValueError(
            f"add() takes a bucket, an object, or bucket, key[, keydata] (got {len(args)} values)"
        )

    def add_bucket(self, bucket: Union[Bucket, str]) -> Job:
        """Run over every key in the bucket. Replaces the current inputs."""
        return self._replace(_bucket_name(bucket))

    def add_object(self, robject: RObject) -> Job:
        return self.add_key(robject.bucket, robject.key)

    def add_key(self, bucket: Union[Bucket, str], key: str, keydata: Any = _NO_KEYDATA) -> Job:
        entry: KeyInput = [_bucket_name(bucket), key]
        if keydata is not _NO_KEYDATA:
            entry.append(keydata)
        self._keys.append(entry)
        self._inputs = self._keys
        return self

    def _replace(self, value: str) -> Job:
        self._inputs = value
        return self

    # -----------------------------------------------------------------
    # Phases
    # -----------------------------------------------------------------

    @property
    def phases(self) -> Tuple[Phase, ...]:
        return tuple(self._phases)

    query = phases

    def map(self, *params: Any, **options: Any) -> Job:
        """
        Add a map phase.

            map(function, keep=True, arg=...)
            map({"function": ..., "keep": True})

        function is JavaScript source, a {"bucket", "key"} stored function,
        or an Erlang (module, function) pair.
        """
        return self._add_phase("map", params, options)

    def reduce(self, *params: Any, **options: Any) -> Job:
        """Add a reduce phase. Same arguments as map()."""
        return self._add_phase("reduce", params, options)

    def link(self, *params: Any, **options: Any) -> Job:
        """
        Add a link phase, which follows links attached to the inputs.

            link(WalkSpec(...), keep=True)
            link(bucket, tag, keep)
            link(bucket="people", tag="friend", keep=True)

        With no positional spec, bucket/tag/keep describe the walk spec and
        only language/arg apply to the phase.
        """
        positional, opts = _extract_options(params, options)

        if positional and positional[0] is not None:
            spec = WalkSpec.normalize(*positional)[0]
            phase_opts = {k: v for k, v in opts.items() if k not in ("type", "function")}
        else:
            spec_fields = {k: v for k, v in opts.items() if k not in LINK_PHASE_OPTIONS}
            spec = WalkSpec.normalize(spec_fields)[0]
            phase_opts = {k: opts[k] for k in ("language", "arg") if k in opts}

        self._phases.append(Phase.from_options({**phase_opts, "type": "link", "function": spec}))
        return self

    def _add_phase(self, kind: str, params: Tuple[Any, ...], options: Dict[str, Any]) -> Job:
        positional, opts = _extract_options(params, options, allow_descriptor=True)
        merged: Dict[str, Any] = {}
        if positional and positional[0] is not None:
            merged["function"] = positional[0]
        # an options "function" wins over the positional one
        merged.update(opts)
        merged["type"] = kind
        self._phases.append(Phase.from_options(merged))
        return self

    # -----------------------------------------------------------------
    # Serialization
    # -----------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """The wire document: {"inputs": ..., "query": [...]}."""
        inputs = self._inputs if isinstance(self._inputs, str) else [list(e) for e in self._inputs]
        return {
            "inputs": inputs,
            "query": [phase.to_dict() for phase in self._phases],
        }

    def to_json(self, **kwargs: Any) -> str:
        """JSON body for the store's map-reduce endpoint. kwargs go to json.dumps."""
        return json.dumps(self.to_dict(), **kwargs)

    def __repr__(self) -> str:
        return f"Job(inputs={self._inputs!r}, phases={self._phases!r})"


def _extract_options(
    params: Tuple[Any, ...], options: Dict[str, Any], allow_descriptor: bool = False
) -> Tuple[List[Any], Dict[str, Any]]:
    """
    Split a trailing mapping off params and merge keyword options over it.

    With allow_descriptor, a lone mapping that looks like a stored-function
    descriptor stays positional: it has both "bucket" and "key", or one of
    them and no option keys.
    """
    positional = list(params)
    opts: Dict[str, Any] = {}
    if positional and isinstance(positional[-1], Mapping):
        last = positional[-1]
        is_descriptor = allow_descriptor and len(positional) == 1 and _looks_like_descriptor(last)
        if not is_descriptor:
            opts.update(positional.pop())
    opts.update(options)
    return positional, opts


def _looks_like_descriptor(value: Mapping[str, Any]) -> bool:
    if "bucket" in value and "key" in value:
        return True
    has_location = "bucket" in value or "key" in value
    return has_location and not any(k in value for k in PHASE_OPTIONS)


def _is_object(value: Any) -> bool:
    return isinstance(value, RObject) or (hasattr(value, "bucket") and hasattr(value, "key"))


def _is_bucket(value: Any) -> bool:
    return isinstance(value, Bucket) or hasattr(value, "name")


def _bucket_name(bucket: Any) -> str:
    if isinstance(bucket, str):
        return bucket
    if _is_bucket(bucket):
        return bucket.name
    raise ValueError(f"expected a bucket or bucket name, got {bucket!r}")
