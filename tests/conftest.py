"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from loguru import logger
import pytest


@pytest.fixture
def records() -> Iterator[list[dict[str, Any]]]:
    """Capture loguru records emitted while the test runs."""
    captured: list[dict[str, Any]] = []
    handler_id = logger.add(
        lambda message: captured.append(message.record), level="DEBUG"
    )
    yield captured
    logger.remove(handler_id)
