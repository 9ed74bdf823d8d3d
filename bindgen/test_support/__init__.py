# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared helpers for tests that need declared signatures.

Spelling every Argument/QualifiedType by hand makes overload tests hard to
read, so these builders accept compact C++-style parameter lists instead:

  sig("double x, const gtsam::Point3& p")

Only parameter lists are understood (no defaults, templates or return
types); full interface files are parsed elsewhere.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from bindgen.core.arguments import Argument, ArgumentList
from bindgen.core.qualified import QualifiedType, classify
from bindgen.core.type_subst import TemplateSubstitution
from bindgen.overloads import OverloadedFunction

_GRAMMAR = r"""
start: [param ("," param)*]
param: CONST? type_name REF? NAME
type_name: UNSIGNED? NAME ("::" NAME)*

CONST: "const"
UNSIGNED: "unsigned"
REF: "&" | "*"
NAME: /[A-Za-z_][A-Za-z0-9_]*/

%import common.WS
%ignore WS
"""

_PARSER = Lark(
	_GRAMMAR,
	parser="lalr",
	lexer="basic",
	start="start",
	maybe_placeholders=False,
)


class SignatureSyntaxError(ValueError):
	"""Raised when a test signature string cannot be parsed."""


def _name(node: Tree) -> str:
	return node.data if isinstance(node.data, str) else node.data.value


def _type_from_tree(node: Tree) -> QualifiedType:
	toks = [c for c in node.children if isinstance(c, Token)]
	if toks and toks[0].type == "UNSIGNED":
		# `unsigned char` and friends: one basic type spelled with two words.
		spelled = " ".join(t.value for t in toks)
		return QualifiedType(spelled, (), classify(spelled))
	*namespaces, name = [t.value for t in toks]
	return QualifiedType(name, tuple(namespaces), classify(name, namespaces))


def _argument_from_tree(node: Tree) -> Argument:
	is_const = False
	ref: Optional[str] = None
	ty: Optional[QualifiedType] = None
	arg_name = ""
	for child in node.children:
		if isinstance(child, Tree) and _name(child) == "type_name":
			ty = _type_from_tree(child)
		elif isinstance(child, Token):
			if child.type == "CONST":
				is_const = True
			elif child.type == "REF":
				ref = child.value
			elif child.type == "NAME":
				arg_name = child.value
	if ty is None or not arg_name:
		raise SignatureSyntaxError(f"incomplete parameter: {node}")
	return Argument(arg_name, ty, is_const=is_const, is_ref=ref == "&", is_ptr=ref == "*")


def sig(text: str) -> ArgumentList:
	"""Parse a parameter list (`"int a, gtsam::Pose3 b"`); '' is the empty list."""
	try:
		tree = _PARSER.parse(text)
	except UnexpectedInput as err:
		raise SignatureSyntaxError(f"cannot parse signature {text!r}: {err}") from err
	return ArgumentList(_argument_from_tree(p) for p in tree.children if isinstance(p, Tree))


def sigs(texts: Iterable[str]) -> List[ArgumentList]:
	return [sig(t) for t in texts]


def qt(spelling: str) -> QualifiedType:
	"""Shorthand for `QualifiedType.of`."""
	return QualifiedType.of(spelling)


def subst(template_arg: str, concrete: str, expanded_class: Optional[str] = None) -> TemplateSubstitution:
	return TemplateSubstitution(
		template_arg,
		qt(concrete),
		qt(expanded_class) if expanded_class is not None else None,
	)


def make_function(name: str, signatures: Iterable[str], inst_name: Optional[str] = None) -> OverloadedFunction:
	"""An OverloadedFunction with one declaration per signature string."""
	fn = OverloadedFunction()
	inst = qt(inst_name) if inst_name is not None else None
	for text in signatures:
		fn.add_overload(name, sig(text), inst)
	return fn


def make_methods(table: Mapping[str, Iterable[str]]) -> dict[str, OverloadedFunction]:
	"""name -> OverloadedFunction table, in mapping order."""
	return {name: make_function(name, texts) for name, texts in table.items()}


__all__ = [
	"SignatureSyntaxError",
	"make_function",
	"make_methods",
	"qt",
	"sig",
	"sigs",
	"subst",
]
