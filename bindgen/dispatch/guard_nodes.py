# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Dispatch guard intermediate representation.

Pipeline placement:
  ArgumentOverloads → guard IR (this file) → host back end (render.py) → text

A guard is the code a generated binding runs, at call time, to decide whether
one native overload accepts the arguments the caller supplied. The host only
knows `len(args)` and the keyword names in `kwargs`, so every check here is
phrased in those terms.

Nodes carry no syntax. Back ends decide spelling, indentation and how a
coercion is written; the predicates on `AmbiguityCheck` and `ArityCheck` are
the reference semantics the rendered code must agree with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from bindgen.core.qualified import QualifiedType

AMBIGUOUS_NARGS_MESSAGE = (
	"Overloads with the same number of arguments exist. "
	"Please use keyword arguments to differentiate them!"
)


class GuardNode:
	"""Base class for guard IR nodes."""
	pass


@dataclass(frozen=True)
class NoMatch(GuardNode):
	"""
	Report "this overload does not apply" and fall through to the next one.

	Void callables report a bare False; value-returning callables report
	(False, None) so the dispatcher can tell a failed match from a matched call
	that returned a real value.
	"""
	is_void: bool


@dataclass(frozen=True)
class Raise(GuardNode):
	"""Abort the whole dispatch with a host exception."""
	exc: str
	message: str


@dataclass(frozen=True)
class AmbiguityCheck(GuardNode):
	"""
	Reject positional-only calls whose argument count matches several overloads.

	Fires only when no keyword argument is present; any keyword argument is
	taken as enough to disambiguate.
	"""
	arities: Tuple[int, ...]
	on_hit: Raise = field(default_factory=lambda: Raise("TypeError", AMBIGUOUS_NARGS_MESSAGE))

	def fires(self, n_positional: int, n_keywords: int) -> bool:
		return n_keywords == 0 and (n_positional + n_keywords) in self.arities


@dataclass(frozen=True)
class ArityCheck(GuardNode):
	"""total supplied arguments != arity → on_mismatch"""
	arity: int
	on_mismatch: NoMatch

	def accepts(self, n_positional: int, n_keywords: int) -> bool:
		return n_positional + n_keywords == self.arity


@dataclass(frozen=True)
class BindParams(GuardNode):
	"""
	__params = positional args bound to `names` in order, then keyword args
	overlaid onto the same slots (keywords win).
	"""
	names: Tuple[str, ...]


@dataclass(frozen=True)
class Coerce(GuardNode):
	"""name = __params[name] checked/converted to `type`"""
	name: str
	type: QualifiedType


@dataclass(frozen=True)
class CoerceAll(GuardNode):
	"""Run every coercion; any failure → on_failure."""
	coercions: Tuple[Coerce, ...]
	on_failure: NoMatch


@dataclass(frozen=True)
class Invoke(GuardNode):
	"""
	Report a match by handing the coerced values to the native call.

	`callee` is the host name the emitted module provides for the native
	invocation; it is called with the overload index followed by the bound
	values in declaration order.
	"""
	index: int
	names: Tuple[str, ...]
	is_void: bool
	callee: str


@dataclass(frozen=True)
class Guard:
	"""A straight-line sequence of guard nodes emitted as one fragment."""
	nodes: Tuple[GuardNode, ...] = ()

	def __bool__(self) -> bool:
		return bool(self.nodes)

	def __iter__(self):
		return iter(self.nodes)


@dataclass(frozen=True)
class Resolver:
	"""One per-overload resolver function: guard followed by the match."""
	name: str
	guard: Guard
	invoke: Invoke


@dataclass(frozen=True)
class Dispatcher:
	"""A complete host entry point for one overload set."""
	name: str
	is_void: bool
	ambiguity: Guard
	resolvers: Tuple[Resolver, ...]


__all__ = [
	"AMBIGUOUS_NARGS_MESSAGE",
	"AmbiguityCheck",
	"ArityCheck",
	"BindParams",
	"Coerce",
	"CoerceAll",
	"Dispatcher",
	"Guard",
	"GuardNode",
	"Invoke",
	"NoMatch",
	"Raise",
	"Resolver",
]
