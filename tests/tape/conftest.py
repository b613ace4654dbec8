"""Shared fixtures and utilities for Tape tests."""

from typing import Callable

import pytest

from tape import Tape, TapeBufferingHost, TapeRunResult, TapeSettings


@pytest.fixture
def host():
    """Create a fresh buffering host for each test."""
    return TapeBufferingHost(seed=1234)


@pytest.fixture
def tape(host):
    """Create a Tape interpreter that writes to the buffering host."""
    return Tape(host=host)


@pytest.fixture
def tape_custom() -> Callable[..., Tape]:
    """Factory for Tape interpreters with custom settings and host."""
    def _create_tape(host: TapeBufferingHost | None = None, **settings: int | bool) -> Tape:
        return Tape(TapeSettings(**settings), host if host is not None else TapeBufferingHost())

    return _create_tape


class TapeTestHelpers:
    """Helper utilities for Tape testing."""

    @staticmethod
    def run_and_capture(source: str, host: TapeBufferingHost | None = None) -> str:
        """Run a program on a buffering host and return its output."""
        buffering_host = host if host is not None else TapeBufferingHost()
        Tape(host=buffering_host).run(source)
        return buffering_host.output

    @staticmethod
    def assert_output(source: str, expected: str) -> None:
        """Assert that a program produces exactly the expected output."""
        result = TapeTestHelpers.run_and_capture(source)
        assert result == expected, f"Expected output {expected!r}, got {result!r}"

    @staticmethod
    def root_tape(result: TapeRunResult) -> list[int]:
        """Return the cells of the root frame after a run."""
        return result.root_frame.tape


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return TapeTestHelpers
