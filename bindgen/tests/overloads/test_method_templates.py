# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from bindgen.errors import DependencyMissing
from bindgen.overloads import (
	collect_dependency_diagnostics,
	expand_method_template,
	verify_method_arguments,
)
from bindgen.test_support import make_methods, sig, subst

VALID = ["double", "int", "gtsam::Pose2"]


def test_expand_method_template_keeps_keys_and_leaves_input_alone() -> None:
	methods = make_methods(
		{
			"print": ["T t"],
			"between": ["This other", "This other, double tol"],
			"dim": [""],
		}
	)
	out = expand_method_template(methods, subst("T", "gtsam::Pose2", expanded_class="gtsam::PriorFactorPose2"))

	assert list(out) == ["print", "between", "dim"]
	assert out["print"].argument_list(0) == sig("gtsam::Pose2 t")
	assert out["between"].argument_list(0) == sig("gtsam::PriorFactorPose2 other")
	assert out["between"].argument_list(1) == sig("gtsam::PriorFactorPose2 other, double tol")
	assert out["dim"].nr_overloads() == 1

	# Input table and its overload sets are not touched.
	assert methods["print"].argument_list(0) == sig("T t")
	assert methods["between"].argument_list(0) == sig("This other")
	assert out["print"] is not methods["print"]


def test_verify_method_arguments_passes_valid_table() -> None:
	methods = make_methods({"a": ["double x"], "b": ["int n, gtsam::Pose2 p"]})
	verify_method_arguments(VALID, methods)


def test_verify_method_arguments_aborts_at_first_bad_entry() -> None:
	methods = make_methods(
		{
			"ok": ["double x"],
			"first_bad": ["gtsam::Missing m"],
			"second_bad": ["gtsam::AlsoMissing m"],
		}
	)
	with pytest.raises(DependencyMissing) as info:
		verify_method_arguments(VALID, methods)
	assert info.value.type_name == "gtsam::Missing"
	assert info.value.context == "checking argument of first_bad"


def test_collect_dependency_diagnostics() -> None:
	good = make_methods({"a": ["double x"]})
	assert collect_dependency_diagnostics(VALID, good) == []

	bad = make_methods({"a": ["double x"], "b": ["gtsam::Missing m"]})
	diags = collect_dependency_diagnostics(VALID, bad)
	assert len(diags) == 1
	assert diags[0].code == "dependency-missing"
	assert diags[0].phase == "validate"
	assert "gtsam::Missing" in diags[0].message
