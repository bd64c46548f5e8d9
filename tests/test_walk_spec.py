from __future__ import annotations

import pytest

from mapred.model import WalkSpec


def test_defaults_are_wildcards():
    spec = WalkSpec()
    assert (spec.bucket, spec.tag, spec.keep) == ("_", "_", False)


def test_normalize_mapping():
    (spec,) = WalkSpec.normalize({"bucket": "people", "tag": "friend", "keep": 1})
    assert spec == WalkSpec("people", "friend", True)


def test_normalize_mapping_result_alias():
    (spec,) = WalkSpec.normalize({"tag": "friend", "result": True})
    assert spec == WalkSpec("_", "friend", True)


def test_normalize_missing_fields_become_wildcards():
    (spec,) = WalkSpec.normalize({"bucket": None, "tag": ""})
    assert spec == WalkSpec()


def test_normalize_passes_walk_specs_through():
    spec = WalkSpec("b", "t")
    assert WalkSpec.normalize(spec)[0] is spec


def test_normalize_positional_groups():
    specs = WalkSpec.normalize("b1", "t1", True, {"bucket": "b2"}, ["b3", None, False])
    assert specs == [
        WalkSpec("b1", "t1", True),
        WalkSpec("b2", "_", False),
        WalkSpec("b3", "_", False),
    ]


def test_normalize_rejects_dangling_values():
    with pytest.raises(ValueError, match="too few arguments"):
        WalkSpec.normalize("b1", "t1", True, "b2")


def test_str_is_link_walk_segment():
    assert str(WalkSpec()) == "_,_,_"
    assert str(WalkSpec("people", "friend", True)) == "people,friend,1"
    assert str(WalkSpec("my bucket", "a/b")) == "my%20bucket,a%2Fb,_"


def test_matches_with_wildcards():
    assert WalkSpec().matches(WalkSpec("people", "friend"))
    assert WalkSpec("people").matches({"bucket": "people", "tag": "friend"})
    assert WalkSpec(tag="friend").matches(WalkSpec("people", "friend", True))
    assert not WalkSpec("people", "friend").matches(WalkSpec("people", "enemy"))
    assert not WalkSpec("places").matches(WalkSpec("people"))
