# tests/core/conftest.py
import pytest

from remediator.controllers.remediation_controller import RemediationController
from remediator.dom.registry import RuleRegistry


@pytest.fixture
def registry():
    """A fresh registry with the built-in rules for every test."""
    return RuleRegistry()


@pytest.fixture
def controller(registry):
    return RemediationController(registry=registry)
