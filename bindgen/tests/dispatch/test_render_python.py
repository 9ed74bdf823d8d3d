# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Rendered python-back-end dispatchers are executed here, so these tests check
the behaviour of the emitted code rather than its spelling.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List

import pytest

from bindgen.dispatch.guard_nodes import AMBIGUOUS_NARGS_MESSAGE
from bindgen.dispatch.render import HostCheck, HostTypeMap, RenderOptions, render_guard
from bindgen.overloads import OverloadedFunction
from bindgen.test_support import make_function, sig

PY = RenderOptions("python")


class Point3:
	pass


def _load(fn: OverloadedFunction, is_void: bool, options: RenderOptions = PY) -> tuple[Callable[..., Any], List[tuple]]:
	calls: List[tuple] = []

	def native(index: int, *values: Any) -> tuple:
		calls.append((index, values))
		return ("called", index, values)

	namespace: Dict[str, Any] = {"__call_native": native, "Point3": Point3}
	exec(fn.dispatcher_source(is_void, options), namespace)
	return namespace[fn.host_name()], calls


def test_guard_text_uses_python_spelling() -> None:
	fn = make_function("f", ["double x, gtsam::Point3 p"])
	text = render_guard(fn.overloads.dispatch_guard(fn.argument_list(0), is_void=False), PY)
	assert text == (
		"    if len(args) + len(kwargs) != 2:\n"
		"        return False, None\n"
		"    __names = ['x', 'p']\n"
		"    __params = dict(zip(__names, args))\n"
		"    __params.update(kwargs)\n"
		"    try:\n"
		"        x = __params['x']\n"
		"        if not isinstance(x, (int, float)) or isinstance(x, bool):\n"
		"            raise TypeError('x')\n"
		"        x = float(x)\n"
		"        p = __params['p']\n"
		"        if not isinstance(p, Point3):\n"
		"            raise TypeError('p')\n"
		"    except Exception:\n"
		"        return False, None\n"
	)


def test_ambiguous_positional_call_raises() -> None:
	f, calls = _load(make_function("f", ["int x", "int x, int y", "double z"]), is_void=False)
	with pytest.raises(TypeError, match="keyword arguments to differentiate"):
		f(1)
	assert calls == []


def test_keyword_call_selects_overload_by_name() -> None:
	f, _ = _load(make_function("f", ["int x", "int x, int y", "double z"]), is_void=False)
	assert f(x=3) == ("called", 0, (3,))
	assert f(z=2.5) == ("called", 2, (2.5,))


def test_unique_arity_dispatches_positionally() -> None:
	f, _ = _load(make_function("f", ["int x", "int x, int y", "double z"]), is_void=False)
	assert f(1, 2) == ("called", 1, (1, 2))
	assert f(1, y=2) == ("called", 1, (1, 2))


def test_ambiguity_guard_scenarios() -> None:
	fn = make_function("g", ["int a, int b", "int a, int b, int c", "double a, double b, double c", "int a, int b, int c, int d"])
	g, _ = _load(fn, is_void=False)
	with pytest.raises(TypeError) as info:
		g(1, 2, 3)
	assert str(info.value) == AMBIGUOUS_NARGS_MESSAGE
	assert g(1, 2) == ("called", 0, (1, 2))
	assert g(1, 2, 3, 4) == ("called", 3, (1, 2, 3, 4))
	# With a keyword present the first matching overload of that arity wins.
	assert g(1, 2, c=3) == ("called", 1, (1, 2, 3))


def test_no_matching_overload_raises() -> None:
	f, _ = _load(make_function("f", ["int x", "int x, int y", "double z"]), is_void=False)
	with pytest.raises(TypeError, match="no overload matches"):
		f(w=1)
	with pytest.raises(TypeError, match="no overload matches"):
		f(1, 2, 3)


def test_keyword_overlaps_positional_slot_is_no_match() -> None:
	h, calls = _load(make_function("h", ["int a, int b"]), is_void=False)
	with pytest.raises(TypeError, match="no overload matches"):
		h(1, a=7)
	assert calls == []


def test_failed_coercion_falls_through_to_next_overload() -> None:
	fn = make_function("p", ["gtsam::Point3 v", "double v, int n"])
	p, _ = _load(fn, is_void=False)
	pt = Point3()
	assert p(pt) == ("called", 0, (pt,))
	with pytest.raises(TypeError, match="no overload matches"):
		p(1.0)
	assert p(1.0, 2) == ("called", 1, (1.0, 2))


def test_string_slot_does_not_absorb_int() -> None:
	f, _ = _load(make_function("f", ["string s", "int s"]), is_void=False)
	assert f(s=5) == ("called", 1, (5,))
	assert f(s="five") == ("called", 0, ("five",))


def test_int_slot_does_not_truncate_float() -> None:
	g, _ = _load(make_function("g", ["int x", "double x"]), is_void=False)
	assert g(x=2.5) == ("called", 1, (2.5,))
	assert g(x=2) == ("called", 0, (2,))


def test_int_slot_rejects_bool() -> None:
	n, calls = _load(make_function("n", ["int i"]), is_void=False)
	with pytest.raises(TypeError, match="no overload matches"):
		n(True)
	assert calls == []
	pick, _ = _load(make_function("pick", ["int i", "bool i"]), is_void=False)
	assert pick(i=True) == ("called", 1, (True,))


def test_bool_slot_rejects_int() -> None:
	b, _ = _load(make_function("b", ["bool flag"]), is_void=False)
	with pytest.raises(TypeError, match="no overload matches"):
		b(1)
	assert b(False) == ("called", 0, (False,))


def test_string_slot_rejects_number() -> None:
	s, _ = _load(make_function("s", ["string name"]), is_void=False)
	with pytest.raises(TypeError, match="no overload matches"):
		s(3.5)
	assert s("pose") == ("called", 0, ("pose",))


def test_double_slot_widens_int() -> None:
	d, calls = _load(make_function("d", ["double x"]), is_void=False)
	assert d(3) == ("called", 0, (3.0,))
	assert type(calls[0][1][0]) is float
	with pytest.raises(TypeError, match="no overload matches"):
		d("3")


def test_void_dispatcher_returns_none_after_native_call() -> None:
	fn = make_function("setValue", ["int i", "string s, int i"])
	set_value, calls = _load(fn, is_void=True)
	assert set_value(4) is None
	assert set_value("k", i=2) is None
	assert calls == [(0, (4,)), (1, ("k", 2))]


def test_zero_argument_overload() -> None:
	fn = make_function("size", ["", "int n"])
	size, _ = _load(fn, is_void=False)
	assert size() == ("called", 0, ())
	assert size(5) == ("called", 1, (5,))


def test_instantiated_function_exposed_under_host_name() -> None:
	fn = make_function("templatedMethod", ["gtsam::Point3 t"], inst_name="gtsam::Point3")
	templated, _ = _load(fn, is_void=False)
	assert templated.__name__ == "templatedMethodPoint3"


def test_host_type_map_override() -> None:
	opts = RenderOptions("python", host_types=HostTypeMap({"double": HostCheck(("int", "float"), converter="round")}))
	fn = make_function("r", ["double x"])
	r, _ = _load(fn, is_void=False, options=opts)
	assert r(2.6) == ("called", 0, (3,))
