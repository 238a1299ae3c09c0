"""Shared fixtures for codegen-toolbox tests."""

from collections.abc import Iterator

import pytest

from codegen_toolbox.output.routing import MemoryRouter, set_default_router


@pytest.fixture(autouse=True)
def reset_default_router() -> Iterator[None]:
    """Restore the lazy default router after each test."""
    yield
    set_default_router(None)


@pytest.fixture
def memory_router() -> MemoryRouter:
    """In-memory router with no base directory."""
    return MemoryRouter()
