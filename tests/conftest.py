from __future__ import annotations

import pytest

from sieve.logging import configure_logging


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging() -> None:
    configure_logging(level="WARNING")
