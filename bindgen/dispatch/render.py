# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Host back ends for guard IR.

Each back end turns the same IR into source text for one host dialect:

- `cython`: the `.pyx` dialect of the generated extension module. Tab
  indentation, `<T>(value)` casts; wrapped classes use the checked
  `<T?>(value)` cast.
- `python`: plain Python 3. Four-space indentation, basic types converted
  through a `HostTypeMap`, wrapped classes checked with `isinstance`.

Every coercion is a pass/fail check: a value of the wrong host type raises
inside the guard's `try`, which turns into the no-match result. Basic and
array types are checked with `isinstance` in both dialects before they are
converted, so `int` never absorbs a `bool` or truncates a `float`, and a
`string` slot never stringifies a number.

Renderers only format. Arity and ambiguity decisions are made once, when the
IR is built, and are never recomputed here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple, Type

from bindgen.core.qualified import QualifiedType, TypeCategory
from bindgen.dispatch.guard_nodes import (
	AmbiguityCheck,
	ArityCheck,
	BindParams,
	Coerce,
	CoerceAll,
	Dispatcher,
	Guard,
	GuardNode,
	Invoke,
	NoMatch,
	Raise,
)

# Host class of the dense arrays Eigen types are exposed as.
ARRAY_CHECK_TYPE = "np.ndarray"


@dataclass(frozen=True)
class HostCheck:
	"""
	Host-side test for one basic type: `isinstance(v, accepts)` and not
	`isinstance(v, rejects)`, then `converter(v)` when a converter is given.
	"""

	accepts: Tuple[str, ...]
	converter: Optional[str] = None
	rejects: Tuple[str, ...] = ()

	def condition(self, name: str) -> str:
		cond = f"not isinstance({name}, {_isinstance_arg(self.accepts)})"
		if self.rejects:
			cond += f" or isinstance({name}, {_isinstance_arg(self.rejects)})"
		return cond


def _isinstance_arg(types: Tuple[str, ...]) -> str:
	if len(types) == 1:
		return types[0]
	return "(" + ", ".join(types) + ")"


@dataclass(frozen=True)
class HostTypeMap:
	"""Basic declared type name -> host check (both back ends)."""

	checks: Mapping[str, HostCheck] = field(
		default_factory=lambda: {
			"double": HostCheck(("int", "float"), converter="float", rejects=("bool",)),
			"int": HostCheck(("int",), rejects=("bool",)),
			"size_t": HostCheck(("int",), rejects=("bool",)),
			"Key": HostCheck(("int",), rejects=("bool",)),
			"unsigned char": HostCheck(("int",), rejects=("bool",)),
			"bool": HostCheck(("bool",)),
			"char": HostCheck(("str",)),
			"string": HostCheck(("str",)),
		}
	)

	def check(self, ty: QualifiedType) -> HostCheck:
		"""Check for a basic or array type; wrapped classes are handled by the dialect."""
		if ty.category is TypeCategory.EIGEN:
			return HostCheck((ARRAY_CHECK_TYPE,))
		found = self.checks.get(ty.name) if ty.is_basic else None
		if found is None:
			raise ValueError(f"no host check for type '{ty.qualified_name()}'")
		return found


DEFAULT_HOST_TYPES = HostTypeMap()


@dataclass(frozen=True)
class RenderOptions:
	"""
	Rendering knobs. `None` means "use the back end's default" for the
	indentation settings.
	"""

	backend: str = "cython"
	indent_level: Optional[int] = None
	indent_unit: Optional[str] = None
	host_types: HostTypeMap = DEFAULT_HOST_TYPES


class GuardRenderer:
	"""Shared rendering walk; subclasses supply the dialect-specific spellings."""

	indent_unit = "\t"
	default_indent_level = 2

	def __init__(self, options: RenderOptions) -> None:
		self.options = options
		self.unit = options.indent_unit if options.indent_unit is not None else self.indent_unit

	# Dialect hooks

	def ambiguity_condition(self, arities: tuple[int, ...]) -> str:
		raise NotImplementedError

	def arity_condition(self, arity: int) -> str:
		raise NotImplementedError

	def class_coerce_lines(self, node: Coerce) -> List[str]:
		raise NotImplementedError

	def convert_line(self, node: Coerce, check: HostCheck) -> Optional[str]:
		raise NotImplementedError

	def coerce_lines(self, node: Coerce) -> List[str]:
		if node.type.category is TypeCategory.CLASS:
			return self.class_coerce_lines(node)
		check = self.options.host_types.check(node.type)
		lines = [
			f"{node.name} = __params[{node.name!r}]",
			f"if {check.condition(node.name)}:",
			f"{self.unit}raise TypeError({node.name!r})",
		]
		convert = self.convert_line(node, check)
		if convert is not None:
			lines.append(convert)
		return lines

	# Walk

	def level(self) -> int:
		if self.options.indent_level is not None:
			return self.options.indent_level
		return self.default_indent_level

	def render_guard(self, guard: Guard, level: Optional[int] = None) -> str:
		lines: List[str] = []
		base = self.level() if level is None else level
		for node in guard:
			self._emit(node, base, lines)
		return "".join(f"{line}\n" for line in lines)

	def render_dispatcher(self, dispatcher: Dispatcher, level: int = 0) -> str:
		pad = self.unit * level
		inner = self.unit * (level + 1)
		lines: List[str] = [f"{pad}def {dispatcher.name}(*args, **kwargs):"]
		for node in dispatcher.ambiguity:
			self._emit(node, level + 1, lines)
		for resolver in dispatcher.resolvers:
			lines.append(f"{inner}def {resolver.name}(args, kwargs):")
			for node in resolver.guard:
				self._emit(node, level + 2, lines)
			self._emit(resolver.invoke, level + 2, lines)
		names = "".join(f"{r.name}, " for r in dispatcher.resolvers).rstrip()
		lines.append(f"{inner}for __resolve in ({names}):")
		body = self.unit * (level + 2)
		if dispatcher.is_void:
			lines.append(f"{body}if __resolve(args, kwargs):")
			lines.append(f"{body}{self.unit}return")
		else:
			lines.append(f"{body}__matched, __result = __resolve(args, kwargs)")
			lines.append(f"{body}if __matched:")
			lines.append(f"{body}{self.unit}return __result")
		message = f"{dispatcher.name}: no overload matches the supplied arguments"
		lines.append(f"{inner}raise TypeError({message!r})")
		return "".join(f"{line}\n" for line in lines)

	def _emit(self, node: GuardNode, level: int, lines: List[str]) -> None:
		pad = self.unit * level
		if isinstance(node, AmbiguityCheck):
			lines.append(pad + self.ambiguity_condition(node.arities))
			self._emit(node.on_hit, level + 1, lines)
		elif isinstance(node, ArityCheck):
			lines.append(pad + self.arity_condition(node.arity))
			self._emit(node.on_mismatch, level + 1, lines)
		elif isinstance(node, BindParams):
			names = ", ".join(repr(n) for n in node.names)
			lines.append(f"{pad}__names = [{names}]")
			lines.append(f"{pad}__params = dict(zip(__names, args))")
			lines.append(f"{pad}__params.update(kwargs)")
		elif isinstance(node, CoerceAll):
			lines.append(f"{pad}try:")
			for coercion in node.coercions:
				self._emit(coercion, level + 1, lines)
			lines.append(f"{pad}except Exception:")
			self._emit(node.on_failure, level + 1, lines)
		elif isinstance(node, Coerce):
			lines.extend(pad + line for line in self.coerce_lines(node))
		elif isinstance(node, NoMatch):
			lines.append(pad + ("return False" if node.is_void else "return False, None"))
		elif isinstance(node, Raise):
			lines.append(f"{pad}raise {node.exc}({node.message!r})")
		elif isinstance(node, Invoke):
			call_args = ", ".join([str(node.index), *node.names])
			call = f"{node.callee}({call_args})"
			if node.is_void:
				lines.append(pad + call)
				lines.append(f"{pad}return True")
			else:
				lines.append(f"{pad}return True, {call}")
		else:
			raise TypeError(f"unsupported guard node {type(node).__name__}")


class CythonRenderer(GuardRenderer):
	"""`.pyx` dialect."""

	def ambiguity_condition(self, arities: tuple[int, ...]) -> str:
		listed = ",".join(str(n) for n in arities)
		return f"if len(kwargs)==0 and len(args)+len(kwargs) in [{listed}]:"

	def arity_condition(self, arity: int) -> str:
		return f"if len(args)+len(kwargs) != {arity}:"

	def class_coerce_lines(self, node: Coerce) -> List[str]:
		# `<T?>` raises TypeError for anything that is not a T.
		return [f"{node.name} = <{node.type.pyx_argument_type()}?>(__params[{node.name!r}])"]

	def convert_line(self, node: Coerce, check: HostCheck) -> Optional[str]:
		if not node.type.is_basic:
			return None
		return f"{node.name} = <{node.type.pyx_argument_type()}>({node.name})"


class PythonRenderer(GuardRenderer):
	"""Plain Python 3 dialect."""

	indent_unit = "    "
	default_indent_level = 1

	def ambiguity_condition(self, arities: tuple[int, ...]) -> str:
		listed = ", ".join(str(n) for n in arities)
		return f"if len(kwargs) == 0 and len(args) + len(kwargs) in [{listed}]:"

	def arity_condition(self, arity: int) -> str:
		return f"if len(args) + len(kwargs) != {arity}:"

	def class_coerce_lines(self, node: Coerce) -> List[str]:
		return [
			f"{node.name} = __params[{node.name!r}]",
			f"if not isinstance({node.name}, {node.type.pyx_argument_type()}):",
			f"{self.unit}raise TypeError({node.name!r})",
		]

	def convert_line(self, node: Coerce, check: HostCheck) -> Optional[str]:
		if check.converter is None:
			return None
		return f"{node.name} = {check.converter}({node.name})"


BACKENDS: Dict[str, Type[GuardRenderer]] = {
	"cython": CythonRenderer,
	"python": PythonRenderer,
}


def renderer_for(options: Optional[RenderOptions] = None) -> GuardRenderer:
	options = options or RenderOptions()
	cls = BACKENDS.get(options.backend)
	if cls is None:
		raise ValueError(f"unknown guard back end '{options.backend}' (expected one of {sorted(BACKENDS)})")
	return cls(options)


def render_guard(guard: Guard, options: Optional[RenderOptions] = None) -> str:
	"""Render one guard fragment; an empty guard renders as ''."""
	return renderer_for(options).render_guard(guard)


def render_dispatcher(dispatcher: Dispatcher, options: Optional[RenderOptions] = None) -> str:
	"""Render a complete dispatcher function at `options.indent_level` (default 0)."""
	options = options or RenderOptions()
	level = options.indent_level if options.indent_level is not None else 0
	return renderer_for(options).render_dispatcher(dispatcher, level)


__all__ = [
	"BACKENDS",
	"CythonRenderer",
	"ARRAY_CHECK_TYPE",
	"DEFAULT_HOST_TYPES",
	"GuardRenderer",
	"HostCheck",
	"HostTypeMap",
	"PythonRenderer",
	"RenderOptions",
	"render_dispatcher",
	"render_guard",
	"renderer_for",
]
