# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Errors raised while building and checking overload sets.

`BindgenError` subclasses describe problems in the interface being wrapped
and are meant for the interface author; each carries a stable reason code
and can be turned into a `Diagnostic`. `IndexOutOfRange` is a caller bug and
stays a plain `IndexError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bindgen.core.diagnostics import Diagnostic


@dataclass(frozen=True)
class BindgenError(Exception):
	"""A structured error with a stable reason code."""

	reason_code: str
	message: str

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {"reason_code": self.reason_code, "message": self.message}

	def format_human(self) -> str:
		return f"[{self.reason_code}] {self.message}"

	def to_diagnostic(self, phase: str | None = None) -> Diagnostic:
		return Diagnostic(message=self.message, code=self.reason_code, phase=phase)


@dataclass(frozen=True)
class DependencyMissing(BindgenError):
	"""An argument type is not among the types known to the module."""

	type_name: str = ""
	context: str = ""

	@classmethod
	def create(cls, type_name: str, context: str) -> "DependencyMissing":
		return cls(
			reason_code="dependency-missing",
			message=f"Missing dependency '{type_name}' in {context}",
			type_name=type_name,
			context=context,
		)

	def to_dict(self) -> dict[str, Any]:
		d = super().to_dict()
		d.update({"type_name": self.type_name, "context": self.context})
		return d


@dataclass(frozen=True)
class IdentityConflict(BindgenError):
	"""A repeated declaration disagrees with the identity of the first one."""

	name: str = ""
	expected: str = ""
	got: str = ""

	@classmethod
	def create(cls, name: str, expected: str, got: str) -> "IdentityConflict":
		return cls(
			reason_code="identity-conflict",
			message=f"overload of '{name}' declared as {got}, expected {expected}",
			name=name,
			expected=expected,
			got=got,
		)

	def to_dict(self) -> dict[str, Any]:
		d = super().to_dict()
		d.update({"name": self.name, "expected": self.expected, "got": self.got})
		return d


class IndexOutOfRange(IndexError):
	"""Raised when a signature index is past the end of an overload set."""

	def __init__(self, index: int, size: int) -> None:
		super().__init__(f"overload index {index} out of range (have {size})")
		self.index = index
		self.size = size


__all__ = ["BindgenError", "DependencyMissing", "IdentityConflict", "IndexOutOfRange"]
