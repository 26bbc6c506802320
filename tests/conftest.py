"""
Shared pytest fixtures.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_pingcli_environment(monkeypatch):
    """Keep PINGCLI_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith('PINGCLI_'):
            monkeypatch.delenv(name, raising=False)
