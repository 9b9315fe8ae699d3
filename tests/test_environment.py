from monkey.types.environment import Environment, new_enclosed
from monkey.types.objects import Integer, String


def test_get_missing_reports_not_found():
    env = Environment()
    assert env.get("x") == (None, False)
    assert "x" not in env


def test_set_then_get():
    env = Environment()
    one = Integer(1)
    assert env.set("x", one) is one
    value, found = env.get("x")
    assert found and value is one


def test_lookup_walks_outward():
    outer = Environment()
    outer.set("x", Integer(1))
    inner = new_enclosed(outer)
    value, found = inner.get("x")
    assert found and value.value == 1
    assert inner.find("x") is outer


def test_inner_binding_shadows_without_overwriting():
    outer = Environment()
    outer.set("x", Integer(1))
    inner = Environment.new_enclosed(outer)
    inner.set("x", Integer(2))
    assert inner.get("x")[0].value == 2
    assert outer.get("x")[0].value == 1


def test_later_outer_bindings_are_visible():
    outer = Environment()
    inner = Environment.new_enclosed(outer)
    outer.set("late", Integer(3))
    assert "late" in inner


def test_str_and_repr():
    outer = Environment()
    outer.set("a", Integer(1))
    inner = Environment.new_enclosed(outer)
    inner.set("b", Integer(2))
    assert str(outer) == "{a: 1}"
    assert str(inner) == "{b: 2} -> ..."
    assert repr(inner) == "<Environment chain: {b: 2} -> {a: 1}>"


def test_str_renders_values_without_quoting():
    env = Environment()
    env.set("s", String("hi"))
    env.set("raw", 3)
    assert str(env) == "{s: hi, raw: 3}"
