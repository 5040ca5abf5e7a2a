"""
Pytest configuration and shared fixtures.

This module provides central pytest configuration, custom markers,
and shared fixtures for the trowel test suite. No test touches the real
terminal: streams are substituted with trowel.stdio.overrides().
"""

from collections.abc import Callable, Generator
from io import StringIO

import pytest

from tests.helpers.stdio import FakeStdin
from trowel.console import reset_console
from trowel.stdio import overrides

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no external dependencies)"
    )
    config.addinivalue_line("markers", "property: Property-based tests (hypothesis)")
    config.addinivalue_line("markers", "slow: Tests that take >1 second to run")


def pytest_collection_modifyitems(config, items):
    """Add the 'unit' marker to tests without other markers."""
    for item in items:
        if not any(mark.name in ["property", "slow"] for mark in item.iter_markers()):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Remove environment variables that change output or prompt policy."""
    for name in ("NO_COLOR", "TROWEL_COLOR", "TROWEL_NON_INTERACTIVE"):
        monkeypatch.delenv(name, raising=False)
    reset_console()
    yield
    reset_console()


@pytest.fixture
def output() -> StringIO:
    """Provide a captured output stream."""
    return StringIO()


@pytest.fixture
def terminal(
    output: StringIO,
) -> Generator[Callable[..., FakeStdin], None, None]:
    """
    Install a fake terminal for the duration of a test.

    Yields:
        Factory taking scripted input (bytes or str) and FakeStdin keyword
        arguments; it installs the stdin as the active input and returns it.
        Output is captured in the `output` fixture.
    """
    installed: list = []

    def install(data: bytes | str = b"", **kwargs) -> FakeStdin:
        stdin = FakeStdin(data, **kwargs)
        scope = overrides(stdout=output, stdin=stdin)
        scope.__enter__()
        installed.append(scope)
        return stdin

    yield install

    for scope in reversed(installed):
        scope.__exit__(None, None, None)
