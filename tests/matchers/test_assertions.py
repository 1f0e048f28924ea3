from __future__ import annotations

import pytest

from terraform_testkit.matchers import (
    assert_not,
    assert_that,
    include_output_change,
    include_resource_creation,
)


def test_assert_that_passes_silently(plan_builder) -> None:
    plan = plan_builder.resource(type="aws_instance", name="web").build()

    assert_that(plan, include_resource_creation(type="aws_instance"))


def test_assert_that_raises_with_failure_message(plan_builder) -> None:
    plan = plan_builder.build()

    with pytest.raises(AssertionError) as excinfo:
        assert_that(plan, include_output_change(name="url"))

    assert str(excinfo.value).endswith("a plan including no output changes.")


def test_assert_not_raises_with_negated_message(plan_builder) -> None:
    plan = plan_builder.resource(type="aws_instance", name="web").build()

    with pytest.raises(AssertionError) as excinfo:
        assert_not(plan, include_resource_creation(type="aws_instance"))

    assert "expected: a plan including no resource changes" in str(excinfo.value)


def test_assert_not_passes_when_absent(plan_builder) -> None:
    assert_not(plan_builder.build(), include_resource_creation())
