"""Pytest configuration and fixtures for dataknobs_validation tests."""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_validation import ValidationSettings  # noqa: E402
from dataknobs_validation.settings import ENV_PREFIX  # noqa: E402


@dataclass
class Person:
    """Simple entity used by builder tests."""

    email: str = ""
    name: str = ""
    age: int = 0


@pytest.fixture(autouse=True)
def clean_validation_env(monkeypatch):
    """Keep DATAKNOBS_VALIDATION_* variables from leaking into tests."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def default_settings():
    """Settings with all defaults."""
    return ValidationSettings()


@pytest.fixture
def person():
    """A person with invalid data in every field."""
    return Person(email="not-an-email", name="X", age=-5)
