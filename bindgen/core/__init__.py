"""
bindgen.core: the signature shapes the overload model consumes.

Modules:
  - qualified: QualifiedType (namespaced type descriptor)
  - arguments: Argument / ArgumentList
  - type_subst: TemplateSubstitution
  - diagnostics: Diagnostic record for collected (non-raised) errors
"""

__all__ = [
    "qualified",
    "arguments",
    "type_subst",
    "diagnostics",
]
