#!/usr/bin/env python3
# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Overload sets for wrapped functions and methods.

The declaration parser pushes one `ArgumentList` per declaration it sees for
a callable name. Afterwards, in this order and per overload set:

  1. template instantiation rewrites every held signature (`expand_template`),
  2. validation checks every argument type against the module's known types,
  3. emission asks for the ambiguity guard and one dispatch guard per signature.

Declaration order is kept through all of it; generated code and diagnostics
depend on it.
"""

from __future__ import annotations

import copy
import sys
from dataclasses import dataclass
from typing import Collection, Dict, Iterator, List, Mapping, Optional, Tuple, TypeVar

from bindgen.core.arguments import ArgumentList
from bindgen.core.diagnostics import Diagnostic
from bindgen.core.qualified import QualifiedType
from bindgen.core.type_subst import TemplateSubstitution
from bindgen.dispatch.builder import (
	DEFAULT_CALLEE,
	build_ambiguity_guard,
	build_dispatch_guard,
	build_dispatcher,
	duplicate_arities,
)
from bindgen.dispatch.guard_nodes import Dispatcher, Guard
from bindgen.dispatch.render import RenderOptions, render_dispatcher, render_guard
from bindgen.errors import DependencyMissing, IdentityConflict, IndexOutOfRange


class ArgumentOverloads:
	"""The ordered signatures declared for one callable name."""

	def __init__(self) -> None:
		# Signatures as declared; expansion always starts from these.
		self._declared: List[ArgumentList] = []
		# Signatures as currently held (declared, or the latest expansion).
		self._arg_lists: List[ArgumentList] = []

	def nr_overloads(self) -> int:
		return len(self._arg_lists)

	def __len__(self) -> int:
		return len(self._arg_lists)

	def __iter__(self) -> Iterator[ArgumentList]:
		return iter(self._arg_lists)

	def argument_list(self, i: int) -> ArgumentList:
		if i < 0 or i >= len(self._arg_lists):
			raise IndexOutOfRange(i, len(self._arg_lists))
		return self._arg_lists[i]

	def push_back(self, args: ArgumentList) -> None:
		"""Append a signature. Duplicates (even identical ones) are kept."""
		self._declared.append(args)
		self._arg_lists.append(args)

	def expand_argument_lists_template(self, ts: TemplateSubstitution) -> List[ArgumentList]:
		"""Declared signatures with `ts` applied to every argument type; self is unchanged."""
		return [args.expand_template(ts) for args in self._declared]

	def expand_template(self, ts: TemplateSubstitution) -> None:
		"""
		Replace the held signatures by the declared ones expanded under `ts`.

		Run once per instantiation, after all declarations were pushed. Expansions
		do not stack: a second call discards the first expansion.
		"""
		self._arg_lists = self.expand_argument_lists_template(ts)

	def verify_arguments(self, valid_types: Collection[str], context: str) -> None:
		"""
		Check every argument type, in declaration order, against `valid_types`
		(fully qualified `::` names). Stops at the first unknown type.
		"""
		for args in self._arg_lists:
			for arg in args:
				full_type = arg.type.qualified_name("::")
				if full_type not in valid_types:
					raise DependencyMissing.create(full_type, f"checking argument of {context}")

	# Dispatch guards

	def duplicate_arities(self) -> Tuple[int, ...]:
		return duplicate_arities(self._arg_lists)

	def ambiguity_guard(self) -> Guard:
		return build_ambiguity_guard(self._arg_lists)

	def dispatch_guard(self, args: ArgumentList, is_void: bool) -> Guard:
		return build_dispatch_guard(args, is_void)

	def dispatcher(self, name: str, is_void: bool, callee: str = DEFAULT_CALLEE) -> Dispatcher:
		return build_dispatcher(name, self._arg_lists, is_void, callee=callee)

	def pyx_resolve_overload_params(self, args: ArgumentList, is_void: bool, indent_level: int = 2) -> str:
		"""`.pyx` text of the dispatch guard for one signature."""
		return render_guard(self.dispatch_guard(args, is_void), RenderOptions("cython", indent_level))

	def pyx_check_duplicate_nargs_kwargs(self, indent_level: int = 2) -> str:
		"""
		`.pyx` text of the ambiguity guard: if two overloads take the same number
		of arguments, the caller has to pick one with keyword arguments.
		"""
		return render_guard(self.ambiguity_guard(), RenderOptions("cython", indent_level))

	def __str__(self) -> str:
		return "".join(f"{args}\n" for args in self._arg_lists)


@dataclass(frozen=True)
class FunctionIdentity:
	"""Name plus optional template instantiation an overload set belongs to."""

	name: str
	inst_name: Optional[QualifiedType] = None

	def __str__(self) -> str:
		if self.inst_name is None:
			return f"'{self.name}'"
		return f"'{self.name}' with template argument {self.inst_name.qualified_name(':')}"


class OverloadedFunction:
	"""
	A callable name bound to its overload set.

	The identity is fixed by the first declaration; every later declaration is
	checked against it, and its signature is appended either way.
	"""

	def __init__(self) -> None:
		self.identity: Optional[FunctionIdentity] = None
		self.verbose = False
		self.overloads = ArgumentOverloads()

	@property
	def name(self) -> str:
		return self.identity.name if self.identity is not None else ""

	@property
	def inst_name(self) -> Optional[QualifiedType]:
		return self.identity.inst_name if self.identity is not None else None

	def initialize_or_check(self, name: str, inst_name: Optional[QualifiedType] = None, verbose: bool = False) -> bool:
		"""Record the identity on first use (True) or check it against the recorded one (False)."""
		if not name:
			raise ValueError("OverloadedFunction.initialize_or_check called with empty name")
		got = FunctionIdentity(name, inst_name)
		if self.identity is None:
			self.identity = got
			self.verbose = verbose
			if verbose:
				print(f"Initialized {name}", file=sys.stderr)
			return True
		if got != self.identity:
			raise IdentityConflict.create(name, expected=str(self.identity), got=str(got))
		return False

	def add_overload(
		self,
		name: str,
		args: ArgumentList,
		inst_name: Optional[QualifiedType] = None,
		verbose: bool = False,
	) -> bool:
		"""Add one declaration; returns True for the first declaration of this callable."""
		first = self.initialize_or_check(name, inst_name, verbose)
		self.overloads.push_back(args)
		return first

	def host_name(self) -> str:
		"""Name the instantiated callable is exposed under (`templatedMethod` + `Point2`)."""
		if self.inst_name is None:
			return self.name
		return self.name + self.inst_name.name

	# Overload set passthroughs

	def nr_overloads(self) -> int:
		return self.overloads.nr_overloads()

	def argument_list(self, i: int) -> ArgumentList:
		return self.overloads.argument_list(i)

	def expand_template(self, ts: TemplateSubstitution) -> None:
		self.overloads.expand_template(ts)

	def verify_arguments(self, valid_types: Collection[str], context: Optional[str] = None) -> None:
		self.overloads.verify_arguments(valid_types, context if context is not None else self.name)

	def dispatcher(self, is_void: bool, callee: str = DEFAULT_CALLEE) -> Dispatcher:
		return self.overloads.dispatcher(self.host_name(), is_void, callee)

	def dispatcher_source(self, is_void: bool, options: Optional[RenderOptions] = None) -> str:
		"""Host source of a complete dispatcher for this overload set."""
		return render_dispatcher(self.dispatcher(is_void), options)

	def __str__(self) -> str:
		return f"{self.host_name()}\n{self.overloads}"


F = TypeVar("F")


def expand_method_template(methods: Mapping[str, F], ts: TemplateSubstitution) -> Dict[str, F]:
	"""
	Instantiate a whole name -> callable table under `ts`.

	Each value is copied before its `expand_template` runs, so `methods` itself
	is left untouched.
	"""
	result: Dict[str, F] = {}
	for name, method in methods.items():
		inst = copy.deepcopy(method)
		inst.expand_template(ts)  # type: ignore[attr-defined]
		result[name] = inst
	return result


def verify_method_arguments(valid_types: Collection[str], methods: Mapping[str, F]) -> None:
	"""Validate every callable in table order; the first failure aborts the batch."""
	for method in methods.values():
		method.verify_arguments(valid_types)  # type: ignore[attr-defined]


def collect_dependency_diagnostics(valid_types: Collection[str], methods: Mapping[str, F]) -> List[Diagnostic]:
	"""`verify_method_arguments`, reported as a diagnostic list instead of raising."""
	try:
		verify_method_arguments(valid_types, methods)
	except DependencyMissing as err:
		return [err.to_diagnostic(phase="validate")]
	return []


__all__ = [
	"ArgumentOverloads",
	"FunctionIdentity",
	"OverloadedFunction",
	"collect_dependency_diagnostics",
	"expand_method_template",
	"verify_method_arguments",
]
