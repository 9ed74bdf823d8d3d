# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Build guard IR from declared signatures.

The host caller supplies a count of positional arguments and a set of keyword
names, nothing else. Two facts follow:

- Signatures of distinct lengths are told apart by a single count comparison
  (`ArityCheck`), so that check runs first in every per-overload guard.
- Signatures sharing a length cannot be told apart positionally at all. For
  those lengths one `AmbiguityCheck` is emitted ahead of every per-overload
  guard and is the only node allowed to abort the whole dispatch.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from bindgen.core.arguments import ArgumentList
from bindgen.dispatch.guard_nodes import (
	AmbiguityCheck,
	ArityCheck,
	BindParams,
	Coerce,
	CoerceAll,
	Dispatcher,
	Guard,
	Invoke,
	NoMatch,
	Resolver,
)

DEFAULT_CALLEE = "__call_native"


def duplicate_arities(arg_lists: Iterable[ArgumentList]) -> Tuple[int, ...]:
	"""
	Arities shared by two or more signatures.

	Each arity is reported once, in the order its second occurrence is seen.
	"""
	seen: set[int] = set()
	dups: List[int] = []
	for args in arg_lists:
		nargs = len(args)
		if nargs in seen:
			if nargs not in dups:
				dups.append(nargs)
		else:
			seen.add(nargs)
	return tuple(dups)


def build_ambiguity_guard(arg_lists: Iterable[ArgumentList]) -> Guard:
	"""Ambiguity guard for an overload set; empty when every arity is unique."""
	dups = duplicate_arities(arg_lists)
	if not dups:
		return Guard()
	return Guard((AmbiguityCheck(dups),))


def build_dispatch_guard(args: ArgumentList, is_void: bool) -> Guard:
	"""
	Per-overload guard: arity check, then bind and coerce.

	Zero-argument signatures need nothing beyond the arity check.
	"""
	no_match = NoMatch(is_void)
	nodes: list = [ArityCheck(len(args), no_match)]
	if len(args) > 0:
		nodes.append(BindParams(tuple(args.names())))
		nodes.append(CoerceAll(tuple(Coerce(a.name, a.type) for a in args), no_match))
	return Guard(tuple(nodes))


def build_dispatcher(
	name: str,
	arg_lists: Sequence[ArgumentList],
	is_void: bool,
	*,
	callee: str = DEFAULT_CALLEE,
) -> Dispatcher:
	"""Assemble the ambiguity guard and one resolver per overload, in declaration order."""
	resolvers = tuple(
		Resolver(
			name=f"{name}_{i}",
			guard=build_dispatch_guard(args, is_void),
			invoke=Invoke(index=i, names=tuple(args.names()), is_void=is_void, callee=callee),
		)
		for i, args in enumerate(arg_lists)
	)
	return Dispatcher(
		name=name,
		is_void=is_void,
		ambiguity=build_ambiguity_guard(arg_lists),
		resolvers=resolvers,
	)


__all__ = [
	"DEFAULT_CALLEE",
	"build_ambiguity_guard",
	"build_dispatch_guard",
	"build_dispatcher",
	"duplicate_arities",
]
