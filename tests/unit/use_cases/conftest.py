"""Fixtures for use case tests: a unit of work double with mocked stores."""

from unittest.mock import AsyncMock

import pytest


class FakeUnitOfWork:
    """Counts commits and rollbacks; every store is an AsyncMock."""

    def __init__(self):
        self.products = AsyncMock()
        self.materials = AsyncMock()
        self.bom = AsyncMock()
        self.orders = AsyncMock()
        self.ledger = AsyncMock()
        self.compensations = AsyncMock()
        self.bom.get_lines.return_value = []
        self.opened: list[bool] = []
        self.commits = 0
        self.rollbacks = 0

    def __call__(self, read_only: bool = False) -> "FakeUnitOfWork":
        self.opened.append(read_only)
        return self

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.commits += 1
        else:
            self.rollbacks += 1


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """The double doubles as its own factory."""
    return FakeUnitOfWork()
