"""Pytest configuration.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
and the tests helpers on the import path.
"""

from collections.abc import Iterator

import pytest

from conventions_linter.infrastructure.di.container import ConventionsContainer


@pytest.fixture(autouse=True)
def _fresh_container() -> Iterator[None]:
    """Each test starts without a cached container (config is read per instance)."""
    ConventionsContainer.reset()
    yield
    ConventionsContainer.reset()
