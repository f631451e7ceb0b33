"""Shared fixtures for template tests."""

import pytest
from model_builders import LOC, make_function, make_method, make_model

from js_test_generator.models import ClassInfo, ParamInfo


@pytest.fixture
def add_model():
    """Model with one exported add(a: number, b: number)."""
    return make_model(
        functions=[
            make_function(
                "add",
                [ParamInfo("a", type="number"), ParamInfo("b", type="number")],
            )
        ]
    )


@pytest.fixture
def counter_class():
    """Exported class with a constructor, public, private and async methods."""
    return ClassInfo(
        name="Counter",
        location=LOC,
        methods=(
            make_method("constructor", [ParamInfo("label", type="string")]),
            make_method("increment", [ParamInfo("step", type="number")]),
            make_method("secret", is_public=False),
            make_method("_helper", is_public=False),
            make_method("reset", is_async=True),
        ),
        is_exported=True,
    )
