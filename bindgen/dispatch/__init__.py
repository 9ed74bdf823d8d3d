"""
bindgen.dispatch: runtime overload selection for generated bindings.

Modules:
  - guard_nodes: guard IR (ambiguity/arity checks, binding, coercion, outcomes)
  - builder: signatures -> guard IR
  - render: guard IR -> host source text (cython, python back ends)
"""

from bindgen.dispatch.builder import (
	build_ambiguity_guard,
	build_dispatch_guard,
	build_dispatcher,
	duplicate_arities,
)
from bindgen.dispatch.render import RenderOptions, render_dispatcher, render_guard

__all__ = [
	"RenderOptions",
	"build_ambiguity_guard",
	"build_dispatch_guard",
	"build_dispatcher",
	"duplicate_arities",
	"render_dispatcher",
	"render_guard",
]
