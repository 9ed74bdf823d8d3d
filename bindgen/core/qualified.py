# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Namespaced type descriptors as they appear in interface declarations.

A `QualifiedType` is what the declaration parser hands over for every
argument: a bare type name plus the namespaces it lives in, and a coarse
category the emitters use to decide how a value of that type is checked.

Examples:
- `double`                -> QualifiedType("double", category=BASIS)
- `gtsam::Point3`         -> QualifiedType("Point3", ("gtsam",))
- `gtsam::noiseModel::Base` -> QualifiedType("Base", ("gtsam", "noiseModel"))
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Tuple

# Builtin scalar types passed by value across the binding boundary.
BASIS_TYPES = frozenset({"string", "bool", "char", "unsigned char", "int", "size_t", "double", "Key"})
# Dense linear-algebra types exposed to the host as arrays.
EIGEN_TYPES = frozenset({"Vector", "Matrix"})


class TypeCategory(Enum):
	CLASS = auto()
	EIGEN = auto()
	BASIS = auto()
	VOID = auto()


def classify(name: str, namespaces: Iterable[str] = ()) -> TypeCategory:
	"""Best-effort category for a type name; namespaced names are always classes."""
	if tuple(namespaces):
		return TypeCategory.CLASS
	if name == "void":
		return TypeCategory.VOID
	if name in BASIS_TYPES:
		return TypeCategory.BASIS
	if name in EIGEN_TYPES:
		return TypeCategory.EIGEN
	return TypeCategory.CLASS


@dataclass(frozen=True)
class QualifiedType:
	"""A type name with its enclosing namespaces (outermost first)."""

	name: str
	namespaces: Tuple[str, ...] = ()
	category: TypeCategory = TypeCategory.CLASS

	def __post_init__(self) -> None:
		if not self.name:
			raise ValueError("QualifiedType requires a non-empty name")
		object.__setattr__(self, "namespaces", tuple(self.namespaces))

	@staticmethod
	def of(spelling: str) -> "QualifiedType":
		"""Build from a `::`-separated spelling, inferring the category."""
		parts = [p.strip() for p in spelling.split("::")]
		if any(not p for p in parts):
			raise ValueError(f"malformed qualified type '{spelling}'")
		*namespaces, name = parts
		return QualifiedType(name, tuple(namespaces), classify(name, namespaces))

	def qualified_name(self, delim: str = "::") -> str:
		return delim.join(self.namespaces + (self.name,))

	@property
	def is_basic(self) -> bool:
		return self.category is TypeCategory.BASIS

	def pyx_argument_type(self) -> str:
		"""
		Host-side spelling used when a bound value is cast to this type.

		Wrapped classes drop the library's top-level namespace and join the rest
		with `_` (`gtsam::noiseModel::Base` -> `noiseModel_Base`), which is how
		the generated extension module names nested classes.
		"""
		if self.category is TypeCategory.EIGEN:
			return "np.ndarray"
		if self.category is TypeCategory.CLASS:
			return "_".join(self.namespaces[1:] + (self.name,))
		return self.name

	def __str__(self) -> str:
		return self.qualified_name()


__all__ = ["BASIS_TYPES", "EIGEN_TYPES", "QualifiedType", "TypeCategory", "classify"]
