# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Method locator — resolves a join point's location to at most one method.

The locator is the only window the join point core has onto the runtime's
methods. It answers two questions: does a method matching a location exist,
and what is its visibility. Anything that satisfies :class:`MethodLocator`
can be injected; :class:`ReflectionMethodLocator` is the default and works
on live Python classes and objects through :mod:`inspect`.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from pyweave.aop.properties import LocatorProperties
from pyweave.aop.types import MethodKind, Visibility
from pyweave.core.config import Config

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class MethodQuery:
    """A single locator lookup.

    Attributes:
        target: The type or object to search.
        method_name: Name of the method to find.
        target_is_type: True when *target* was given as a type (class-level
            search), False when it is a specific instance.
        visibility: Required visibility, or ``None`` to accept any.
        method_kind: Whether an instance or a class-level method is wanted.
    """

    target: Any
    method_name: str
    target_is_type: bool
    visibility: Visibility | None = None
    method_kind: MethodKind = MethodKind.INSTANCE


@dataclass(frozen=True)
class MethodDescriptor:
    """A method the locator found."""

    owner: Any
    name: str
    visibility: Visibility
    method_kind: MethodKind


@dataclass
class MethodFinderResult:
    """Outcome of a lookup: found methods and queries that found nothing."""

    matched: list[MethodDescriptor] = field(default_factory=list)
    not_matched: list[MethodQuery] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.matched) + len(self.not_matched)

    def is_empty(self) -> bool:
        return self.total == 0


@runtime_checkable
class MethodLocator(Protocol):
    """Port for method lookup.

    Implementations must return at most one result in total per query, and
    may return none at all when the method is not (yet) defined.
    """

    def find(self, query: MethodQuery) -> MethodFinderResult: ...


def visibility_of(
    locator: MethodLocator,
    target: Any,
    method_name: str,
    method_kind: MethodKind,
    target_is_type: bool,
) -> Visibility | None:
    """Ask *locator* for the visibility of a method, ``None`` if not found."""
    result = locator.find(
        MethodQuery(
            target=target,
            method_name=method_name,
            target_is_type=target_is_type,
            visibility=None,
            method_kind=method_kind,
        )
    )
    if not result.matched:
        logger.debug("No %s %r found on %r; visibility unknown", method_kind.filter_flag, method_name, target)
        return None
    return result.matched[0].visibility


class ReflectionMethodLocator:
    """Locates methods on live classes and objects with :func:`inspect.getattr_static`.

    ``staticmethod`` and ``classmethod`` attributes are class-level methods;
    plain functions and other callables are instance methods. For object
    targets, callables stored on the instance itself also count as instance
    methods.

    Args:
        exclude_ancestor_methods: Only consider methods defined directly on
            the type, not ones inherited from base classes.
    """

    def __init__(self, exclude_ancestor_methods: bool = False) -> None:
        self.exclude_ancestor_methods = exclude_ancestor_methods

    def find(self, query: MethodQuery) -> MethodFinderResult:
        descriptor = self._describe(query)
        if descriptor is None or (query.visibility is not None and descriptor.visibility != query.visibility):
            logger.debug("Locator found no match for %r", query)
            return MethodFinderResult(not_matched=[query])
        logger.debug("Locator matched %s.%s (%s)", descriptor.owner, descriptor.name, descriptor.visibility)
        return MethodFinderResult(matched=[descriptor])

    def _describe(self, query: MethodQuery) -> MethodDescriptor | None:
        if query.target_is_type:
            if not isinstance(query.target, type):
                return None
            owner = query.target
        else:
            owner = type(query.target)

        if not query.target_is_type:
            instance_dict = getattr(query.target, "__dict__", None)
            if isinstance(instance_dict, dict) and query.method_name in instance_dict:
                if not callable(instance_dict[query.method_name]):
                    return None
                return self._matching(query, query.target, MethodKind.INSTANCE)

        if self.exclude_ancestor_methods:
            attr = owner.__dict__.get(query.method_name, _MISSING)
        else:
            try:
                attr = inspect.getattr_static(owner, query.method_name)
            except AttributeError:
                attr = _MISSING
        if attr is _MISSING:
            return None

        if isinstance(attr, (classmethod, staticmethod)):
            kind = MethodKind.CLASS
        elif callable(attr):
            kind = MethodKind.INSTANCE
        else:
            return None
        return self._matching(query, owner, kind)

    @staticmethod
    def _matching(query: MethodQuery, owner: Any, kind: MethodKind) -> MethodDescriptor | None:
        if kind != query.method_kind:
            return None
        return MethodDescriptor(
            owner=owner,
            name=query.method_name,
            visibility=Visibility.of(query.method_name),
            method_kind=kind,
        )


_default_locator: MethodLocator = ReflectionMethodLocator()


def get_default_locator() -> MethodLocator:
    """Return the process-wide locator used by join points built without one."""
    return _default_locator


def set_default_locator(locator: MethodLocator) -> MethodLocator:
    """Replace the process-wide default locator, returning the previous one."""
    global _default_locator
    previous = _default_locator
    _default_locator = locator
    return previous


def configure_locator(config: Config, install: bool = False) -> ReflectionMethodLocator:
    """Build a :class:`ReflectionMethodLocator` from ``pyweave.aop.locator`` settings.

    With *install*, the new locator also becomes the process-wide default.
    """
    properties = config.bind(LocatorProperties)
    locator = ReflectionMethodLocator(exclude_ancestor_methods=properties.exclude_ancestor_methods)
    if install:
        set_default_locator(locator)
    logger.debug("Configured method locator (exclude_ancestor_methods=%s)", properties.exclude_ancestor_methods)
    return locator
