"""
Shared pytest fixtures and configuration for TutorAdapt tests.

This file is automatically discovered by pytest and provides
fixtures available to all tests.
"""

import sys
from copy import deepcopy
from pathlib import Path

import pytest

# Make the `src` package importable from the project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.providers.base import ProviderAdapter  # noqa: E402


VALID_EXERCISE = {
    "question": "What is the derivative of x^2?",
    "options": ["x", "2x", "x^2", "2"],
    "correct_answer": "B",
    "explanation": "By the power rule, d/dx x^n = n x^(n-1).",
}

PROVIDER_EXPLANATION = (
    "Derivatives measure how fast things change, like a car's speedometer.\n\n"
    "Main concept:\n"
    "The derivative is the instantaneous rate of change of a function.\n"
    "Formula: f'(x) = lim h->0 (f(x+h) - f(x)) / h\n\n"
    "Worked example:\n"
    "For f(x) = x^2 the derivative is 2x.\n\n"
    "A derivative is a slope at a single point."
)


class FakeProvider(ProviderAdapter):
    """
    Scriptable provider tier.

    Records every call so tests can assert on tier ordering and on which
    parameters reached the provider.
    """

    def __init__(
        self,
        name="fake",
        available=True,
        explanation=PROVIDER_EXPLANATION,
        exercise=None,
        error=None,
        fail_on_item=None,
    ):
        self.name = name
        self.model_name = f"{name}-model"
        self.available = available
        self.explanation = explanation
        self.exercise = deepcopy(exercise or VALID_EXERCISE)
        self.error = error
        self.fail_on_item = fail_on_item
        self.explanation_calls = []
        self.exercise_calls = []

    def is_available(self):
        return self.available

    def generate_explanation(self, params):
        self.explanation_calls.append(params)
        if self.error is not None:
            raise self.error
        return self.explanation

    def generate_exercise(self, params, difficulty):
        self.exercise_calls.append((params, difficulty))
        if self.error is not None:
            raise self.error
        if self.fail_on_item is not None and len(self.exercise_calls) == self.fail_on_item:
            raise RuntimeError(f"item {self.fail_on_item} failed")
        return deepcopy(self.exercise)


@pytest.fixture
def fake_provider_factory():
    """Factory for FakeProvider instances."""
    return FakeProvider


@pytest.fixture
def working_provider():
    return FakeProvider(name="primary")


@pytest.fixture
def failing_provider():
    return FakeProvider(name="primary", error=ConnectionError("connection refused"))


@pytest.fixture
def unavailable_provider():
    return FakeProvider(name="primary", available=False)


@pytest.fixture
def fallback_orchestrator():
    """Orchestrator with no provider tiers: always local fallback."""
    from src.orchestrator import GenerationOrchestrator

    return GenerationOrchestrator([])


@pytest.fixture
def young_profile():
    """
    Fixture providing a young student who struggles with integrals.

    Returns:
        dict: Wire-format (camelCase) partial profile
    """
    return {
        "age": 14,
        "levelDetail": "9th grade",
        "priorKnowledge": ["fractions"],
        "difficulties": ["integrals"],
        "interests": ["football", "video games"],
        "preferences": {"easyReading": True},
    }


@pytest.fixture
def university_profile():
    """Fixture providing an adult student with prior calculus knowledge."""
    return {
        "age": 20,
        "levelDetail": "Calculus I",
        "priorKnowledge": ["derivatives", "limits"],
        "difficulties": [],
        "interests": ["music"],
        "preferences": {"stepByStep": True, "visualAids": True},
    }


@pytest.fixture
def session_history():
    """
    Fixture providing a short, mixed session history.

    Returns:
        list: Session records, oldest first
    """
    return [
        {
            "topic": "limits",
            "score": {"percentage": 90},
            "timestamp": "2024-05-01T10:00:00Z",
        },
        {
            "topic": "basic derivatives",
            "score": {"percentage": 45},
            "timestamp": "2024-05-02T10:00:00Z",
        },
        {
            "topic": "chain rule",
            "score": {"percentage": 70},
            "timestamp": "2024-05-03T10:00:00Z",
        },
    ]


@pytest.fixture(autouse=True)
def reset_token_tracker():
    """
    Auto-fixture to reset token tracker before each test.

    This ensures tests don't interfere with each other.
    """
    from src.config import token_tracker

    token_tracker.reset()
    yield
    token_tracker.reset()


@pytest.fixture
def temp_schema_file(tmp_path):
    """
    Fixture providing a temporary schema file for testing.

    Args:
        tmp_path: pytest's tmp_path fixture

    Returns:
        Path: Path to temporary schema file
    """
    import json

    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {"test": {"type": "string"}},
        "required": ["test"],
    }

    schema_file = tmp_path / "test.schema.json"
    with open(schema_file, "w") as f:
        json.dump(schema, f)

    return schema_file


# Pytest hooks for better test output


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
