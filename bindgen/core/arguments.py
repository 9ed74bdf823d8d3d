# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Arguments and argument lists of declared signatures.

An `ArgumentList` is one call signature. Order is positional binding order
and is preserved by every transformation in this package; lists are
immutable, so expanding a template always yields a new list.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Tuple, overload

from bindgen.core.qualified import QualifiedType
from bindgen.core.type_subst import TemplateSubstitution


@dataclass(frozen=True)
class Argument:
	"""A named, typed parameter."""

	name: str
	type: QualifiedType
	is_const: bool = False
	is_ref: bool = False
	is_ptr: bool = False

	def expand_template(self, ts: TemplateSubstitution) -> "Argument":
		return replace(self, type=ts(self.type))

	def __str__(self) -> str:
		const = "const " if self.is_const else ""
		mod = "&" if self.is_ref else ("*" if self.is_ptr else "")
		return f"{const}{self.type.qualified_name()}{mod} {self.name}"


class ArgumentList:
	"""Ordered, immutable sequence of Arguments forming one signature."""

	__slots__ = ("_args",)

	def __init__(self, args: Iterable[Argument] = ()) -> None:
		self._args: Tuple[Argument, ...] = tuple(args)

	def __len__(self) -> int:
		return len(self._args)

	def __iter__(self) -> Iterator[Argument]:
		return iter(self._args)

	@overload
	def __getitem__(self, idx: int) -> Argument: ...

	@overload
	def __getitem__(self, idx: slice) -> "ArgumentList": ...

	def __getitem__(self, idx):
		if isinstance(idx, slice):
			return ArgumentList(self._args[idx])
		return self._args[idx]

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, ArgumentList):
			return NotImplemented
		return self._args == other._args

	def __hash__(self) -> int:
		return hash(self._args)

	def __repr__(self) -> str:
		return f"ArgumentList({list(self._args)!r})"

	def __str__(self) -> str:
		return "(" + ", ".join(str(a) for a in self._args) + ")"

	def names(self) -> List[str]:
		return [a.name for a in self._args]

	def types(self) -> List[QualifiedType]:
		return [a.type for a in self._args]

	def expand_template(self, ts: TemplateSubstitution) -> "ArgumentList":
		return ArgumentList(a.expand_template(ts) for a in self._args)


__all__ = ["Argument", "ArgumentList"]
