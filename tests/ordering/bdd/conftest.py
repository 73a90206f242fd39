"""Shared BDD fixtures for the order lifecycle and cart scenarios."""

import pytest


@pytest.fixture()
def error():
    """Container for capturing expected errors in When steps."""
    return {"exc": None}


@pytest.fixture()
def orders():
    """Orders created by the scenario, keyed by their label."""
    return {}
