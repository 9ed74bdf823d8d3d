"""
Common diagnostic structure for validation passes.

Errors raised by the overload model can be turned into a Diagnostic when the
caller wants to collect them instead of stopping at the first exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Diagnostic:
	"""Represents a generator diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Optional phase label ("declare", "instantiate", "validate", "emit").
	phase: str | None = None
	severity: str = "error"
	notes: list[str] = field(default_factory=list)

	def format_human(self) -> str:
		code = f"[{self.code}] " if self.code else ""
		head = f"{self.severity}: {code}{self.message}"
		if not self.notes:
			return head
		return "\n".join([head] + [f"  note: {n}" for n in self.notes])


__all__ = ["Diagnostic"]
