# tests/test_spec_types.py
"""
Tests for spec.types geometry and request types.
"""

from __future__ import annotations

import pytest

from spec.types import GotoOptions, NavigationGoal, Vec3


def test_distance_and_lerp() -> None:
    a = Vec3(0, 0, 0)
    b = Vec3(3, 4, 12)

    assert a.distance_to(b) == 13
    assert a.lerp(b, 0.5) == Vec3(1.5, 2, 6)


def test_floored_rounds_toward_negative_infinity() -> None:
    assert Vec3(-0.5, 64.99, 3.0).floored() == (-1, 64, 3)


def test_goal_constructors() -> None:
    assert NavigationGoal.block(1, 2, 3).tolerance == 0.0
    assert NavigationGoal.near(1, 2, 3, 5).tolerance == 5


def test_negative_tolerance_rejected() -> None:
    with pytest.raises(ValueError):
        NavigationGoal(Vec3(0, 0, 0), -1.0)


def test_goto_options_defaults_and_validation() -> None:
    opts = GotoOptions()
    assert (opts.timeout_s, opts.use_cache, opts.retry_with_fallback) == (None, True, True)

    with pytest.raises(ValueError):
        GotoOptions(timeout_s=0)
