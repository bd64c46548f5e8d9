from __future__ import annotations

import pytest

from mapred.model import WalkSpec
from mapred.phase import Phase


def test_kind_is_case_insensitive():
    assert Phase("MAP", "function(v){return [v];}").kind == "map"
    assert Phase("Reduce", "function(v){return v;}").kind == "reduce"
    assert Phase("LINK", WalkSpec()).kind == "link"


@pytest.mark.parametrize("kind", ["foo", "", None, "mapper", " map"])
def test_rejects_unknown_kind(kind):
    with pytest.raises(ValueError, match="map, reduce, or link"):
        Phase(kind, "function(v){return v;}")


def test_erlang_pair_renders_module_and_function():
    phase = Phase("map", ["mod", "fn"])
    assert phase.language == "erlang"
    assert phase.to_dict() == {
        "map": {"language": "erlang", "keep": False, "module": "mod", "function": "fn"}
    }


def test_pair_must_have_two_elements():
    with pytest.raises(ValueError, match="two elements"):
        Phase("map", ["mod", "fn", "extra"])
    with pytest.raises(ValueError, match="two elements"):
        Phase("reduce", ["mod"])


def test_source_string_renders_source():
    phase = Phase("reduce", "function(v){return v;}")
    assert phase.to_dict() == {
        "reduce": {"language": "javascript", "keep": False, "source": "function(v){return v;}"}
    }


def test_stored_function_fields_are_merged():
    phase = Phase("map", {"bucket": "b", "key": "k"})
    assert phase.to_dict() == {
        "map": {"language": "javascript", "keep": False, "bucket": "b", "key": "k"}
    }


def test_stored_function_needs_bucket_and_key():
    with pytest.raises(ValueError, match="'bucket' and 'key'"):
        Phase("map", {"bucket": "b"})


def test_link_accepts_mapping_without_bucket_or_key():
    phase = Phase("link", {"tag": "friend"})
    assert phase.to_dict() == {"link": {"bucket": "_", "tag": "friend", "keep": False}}


def test_walk_spec_only_for_link_phases():
    with pytest.raises(ValueError, match="link phase"):
        Phase("map", WalkSpec("people", "friend"))


@pytest.mark.parametrize("function", [None, 42, object()])
def test_rejects_other_function_types(function):
    with pytest.raises(ValueError, match="invalid value for function"):
        Phase("map", function)


def test_function_decides_language_over_option():
    assert Phase("map", ["m", "f"], language="javascript").language == "erlang"
    assert Phase("map", "function(v){}", language="erlang").language == "javascript"
    assert Phase("link", WalkSpec(), language="erlang").language == "erlang"
    assert Phase("link", WalkSpec()).language == "javascript"


def test_arg_and_keep():
    phase = Phase("map", "function(v, d, arg){}", keep=True, arg={"limit": 10})
    assert phase.to_dict()["map"] == {
        "language": "javascript",
        "keep": True,
        "source": "function(v, d, arg){}",
        "arg": {"limit": 10},
    }
    # only None and False leave the arg out
    assert Phase("map", "f", arg=0).to_dict()["map"]["arg"] == 0
    assert Phase("map", "f", arg=[]).to_dict()["map"]["arg"] == []
    assert "arg" not in Phase("map", "f").to_dict()["map"]
    assert "arg" not in Phase("map", "f", arg=False).to_dict()["map"]
    assert "arg" not in Phase("link", WalkSpec(), arg=False).to_dict()["link"]


def test_link_keep_prefers_spec_keep():
    assert Phase("link", WalkSpec("b", "t", True)).to_dict()["link"]["keep"] is True
    assert Phase("link", WalkSpec("b", "t", False), keep=True).to_dict()["link"]["keep"] is True
    assert Phase("link", WalkSpec("b", "t", False)).to_dict()["link"]["keep"] is False


def test_link_arg():
    phase = Phase("link", WalkSpec("b", "t"), arg="x")
    assert phase.to_dict() == {"link": {"bucket": "b", "tag": "t", "keep": False, "arg": "x"}}


def test_from_options_accepts_type_alias():
    phase = Phase.from_options({"type": "reduce", "function": "f", "keep": None})
    assert phase.kind == "reduce"
    assert phase.keep is False


def test_fields_are_read_only():
    phase = Phase("map", "f")
    with pytest.raises(AttributeError):
        phase.keep = True
