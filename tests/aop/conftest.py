"""Shared fixtures for join point tests: a scriptable fake method locator."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from pyweave.aop.locator import MethodDescriptor, MethodFinderResult, MethodQuery
from pyweave.aop.types import MethodKind, Visibility


class Account:
    """Sample advised type."""

    def __init__(self, balance: int = 0) -> None:
        self.balance = balance

    def withdraw(self, amount: int) -> int:
        self.balance -= amount
        return self.balance

    @classmethod
    def open(cls, balance: int) -> Account:
        return cls(balance)


class FakeLocator:
    """Locator that returns canned results and records every query."""

    def __init__(self, matched: list[MethodDescriptor] | None = None, not_matched: list[MethodQuery] | None = None):
        self.matched = matched or []
        self.not_matched = not_matched or []
        self.queries: list[MethodQuery] = []

    def find(self, query: MethodQuery) -> MethodFinderResult:
        self.queries.append(query)
        return MethodFinderResult(matched=list(self.matched), not_matched=list(self.not_matched))


@pytest.fixture
def account_type() -> type[Account]:
    return Account


@pytest.fixture
def make_locator() -> Callable[..., FakeLocator]:
    """Build a FakeLocator; ``public=1`` adds one matched public method."""

    def factory(public: int = 0, not_matched: int = 0, name: str = "withdraw") -> FakeLocator:
        matched = [
            MethodDescriptor(owner=Account, name=name, visibility=Visibility.PUBLIC, method_kind=MethodKind.INSTANCE)
            for _ in range(public)
        ]
        missing = [MethodQuery(target=Account, method_name=name, target_is_type=True) for _ in range(not_matched)]
        return FakeLocator(matched=matched, not_matched=missing)

    return factory


@pytest.fixture
def empty_locator(make_locator: Callable[..., FakeLocator]) -> FakeLocator:
    return make_locator()
