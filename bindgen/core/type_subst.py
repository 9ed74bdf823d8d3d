# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Template placeholder substitution."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from bindgen.core.qualified import QualifiedType

# Placeholder that always stands for the class being instantiated.
THIS = "This"


@dataclass(frozen=True)
class TemplateSubstitution:
	"""
	Replace one formal template argument with a concrete type.

	`template_arg` is the placeholder name as written in the declaration
	(`T`), `qualified_type` the concrete type it becomes. When a whole class
	template is instantiated, `expanded_class` is the resulting class and is
	substituted for the `This` placeholder as well.
	"""

	template_arg: str
	qualified_type: QualifiedType
	expanded_class: Optional[QualifiedType] = None

	def __call__(self, ty: QualifiedType) -> QualifiedType:
		"""Apply the substitution to one type, returning it unchanged if it is not a placeholder."""
		if ty.namespaces:
			return ty
		if ty.name == self.template_arg:
			return self.qualified_type
		if ty.name == THIS and self.expanded_class is not None:
			return self.expanded_class
		return ty

	def __str__(self) -> str:
		return f"{self.template_arg} -> {self.qualified_type.qualified_name()}"


__all__ = ["THIS", "TemplateSubstitution"]
