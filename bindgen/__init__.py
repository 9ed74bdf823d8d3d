# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
bindgen: overload sets and runtime dispatch guards for generated bindings.

The host language of a binding cannot pick between native overloads by
itself. This package keeps the declared signatures of every overloaded
callable, instantiates them for templates, validates their argument types and
emits the guard code the binding uses to select an overload at call time.
"""

__all__ = []
