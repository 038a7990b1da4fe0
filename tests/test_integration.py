"""End-to-end round trips through serialize() and back."""

import pytest

from parampack import ParamPackage


def _reload(pkg: ParamPackage) -> ParamPackage:
    return ParamPackage(pkg.serialize())


@pytest.mark.parametrize(
    "value",
    [
        "sdl",
        "",
        "x:y,z$w",
        "$0$1$2",
        "a b c",
        "[bracketed]",
        "|pipe|",
        "[x],y:[z]",
        "[a]:[b]",
        "[p]$1[q]",
    ],
)
def test_scalar_round_trip(value):
    pkg = ParamPackage()
    pkg.set_str("k", value)
    out = _reload(pkg)
    assert out.get_str("k", "dflt") == value
    assert out.keys() == ["k"]


def test_bracket_pair_scalar_is_escaped():
    pkg = ParamPackage()
    pkg.set_str("k", "[x],y:[z]")
    assert pkg.serialize() == "k:[x]$1y$0[z]"


def test_literal_placeholder_token_is_expanded():
    pkg = ParamPackage()
    pkg.set_str("k", "##0[x]")
    assert _reload(pkg).get_str("k") == "[x][x]"


def test_numeric_prefix_read():
    pkg = ParamPackage.from_pairs({"a": "3.5", "b": "12abc"})
    assert pkg.get_int("a", -1) == 3
    assert pkg.get_int("b", -1) == 12
    assert pkg.get_float("b", -1.0) == 12.0


def test_escaping_round_trip():
    """Set("a", "x:y,z$w") survives serialize and reconstruct."""
    pkg = ParamPackage()
    pkg.set("a", "x:y,z$w")
    assert ParamPackage(pkg.serialize()).get("a", "") == "x:y,z$w"


def test_key_with_delimiters_round_trip():
    pkg = ParamPackage()
    pkg.set_str("a:b,c", "1")
    assert _reload(pkg).items() == [("a:b,c", "1")]


def test_empty_package_round_trip():
    assert ParamPackage().serialize() == "[empty]"
    assert not ParamPackage("[empty]").has("anything")


def test_numbers_round_trip():
    pkg = ParamPackage()
    pkg.set("i", -12)
    pkg.set("f", 0.1 + 0.2)
    out = _reload(pkg)
    assert out.get("i", 0) == -12
    assert out.get("f", 0.0) == 0.1 + 0.2


def test_list_round_trip():
    pkg = ParamPackage()
    pkg.set("k", ["a", "b", "c"])
    assert _reload(pkg).get("k", []) == ["a", "b", "c"]


def test_list_items_with_delimiters():
    pkg = ParamPackage()
    pkg.set_str_list("k", ["a,b", "c:d"])
    assert _reload(pkg).get_str_list("k") == ["a,b", "c:d"]


def test_number_lists_round_trip():
    pkg = ParamPackage()
    pkg.set_int_list("i", [1, 2, 3])
    pkg.set_float_list("f", [0.1, -2.5])
    out = _reload(pkg)
    assert out.get_int_list("i") == [1, 2, 3]
    assert out.get_float_list("f") == [0.1, -2.5]


def test_nested_package_round_trip():
    b = ParamPackage()
    b.set_str("x", "1")
    b.set_str("y", "two")
    a = ParamPackage()
    a.set("outer", b)
    assert _reload(a).get("outer", ParamPackage()) == b


def test_nested_package_with_escaped_scalars():
    b = ParamPackage()
    b.set_str("a", "p:q,r")
    b.set_str("b", "$")
    a = ParamPackage()
    a.set_package("outer", b)
    assert a.serialize() == "outer:[a:p$0q$1r,b:$2]"
    assert _reload(a).get_package("outer") == b


def test_empty_nested_package_round_trip():
    a = ParamPackage()
    a.set_package("e", ParamPackage())
    fallback = ParamPackage("z:0,zz:0")
    assert _reload(a).get_package("e", fallback) == ParamPackage()


def test_package_list_round_trip():
    p1 = ParamPackage.from_pairs({"engine": "sdl", "port": "0"})
    p2 = ParamPackage.from_pairs({"engine": "keyboard", "code": "65"})
    a = ParamPackage()
    a.set("packs", [p1, p2])
    out = _reload(a).get("packs", [ParamPackage()])
    assert out == [p1, p2]


def test_three_levels_deep():
    axis = ParamPackage()
    axis.set_float_list("deadzone", [0.1, 0.2])
    axis.set_str("engine", "sdl")

    binding = ParamPackage()
    binding.set_package("axis", axis)
    binding.set_int("port", 1)

    root = ParamPackage()
    root.set_package_list("bindings", [binding, binding])
    root.set_str("name", "pad")

    out = _reload(root)
    bindings = out.get_package_list("bindings")
    assert len(bindings) == 2
    assert bindings[0].get_package("axis").get_float_list("deadzone") == [0.1, 0.2]
    assert bindings[1].get_int("port") == 1
    assert out.get_str("name") == "pad"


def test_type_mismatch_fallback():
    pkg = ParamPackage("k:plain")
    assert pkg.get("k", [7]) == [7]


def test_malformed_input_tolerance():
    pkg = ParamPackage("a:1,bad,c:3")
    assert pkg.items() == [("a", "1"), ("c", "3")]


def test_numeric_parse_failure_fallback():
    assert ParamPackage("k:notanumber").get("k", 5) == 5


def test_serialize_is_stable():
    text = "axis:[deadzone:[0.1|0.2],engine:sdl],name:pad"
    assert ParamPackage(text).serialize() == text
