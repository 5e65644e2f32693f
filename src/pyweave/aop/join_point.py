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
"""JoinPoint — identity of an interceptable method plus its active invocation context.

A join point names one location: a method on a type (``type=Account``) or
on a specific instance (``object=account``), either an instance method or a
class-level method. The identity fields are set once and shared between all
invocations; everything that changes per call lives in the attached
:class:`~pyweave.aop.context.Context`.

Usage::

    location = JoinPoint(type=Account, method_name="withdraw")
    location.exists()        # True once Account.withdraw is defined
    location.visibility      # Visibility.PUBLIC

    # one per actual call, done by the weaver
    jp = location.make_current_context_join_point(
        advice_kind=AdviceKind.AROUND,
        advised_object=account,
        parameters=[100],
        proceed_proc=next_link,
    )
    jp.proceed()             # -> next_link(jp, 100)
"""

from __future__ import annotations

import copy
import functools
import logging
from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from pyweave.aop.comparison import FieldComparator, by_identity, by_string, string_form, three_way
from pyweave.aop.context import PROCEED_NOT_ALLOWED_MESSAGE, Context, invalid_attributes
from pyweave.aop.locator import MethodLocator, MethodQuery, get_default_locator, visibility_of
from pyweave.aop.types import MethodKind, Visibility
from pyweave.kernel.exceptions import LocatorInvariantViolationException, ProceedNotAllowedException
from pyweave.utils.nil_object import NilObject

logger = logging.getLogger(__name__)

_KNOWN_OPTIONS = frozenset(
    {
        "type",
        "target_type",
        "object",
        "target_object",
        "method_name",
        "method",
        "instance_method",
        "class_method",
        "context",
    }
)

_RESERVED = frozenset({"visibility", "locator", "extra_options"})


@functools.total_ordering
class JoinPoint:
    """An addressable, interceptable method location.

    Args:
        options: Options bag; may also be given as keyword arguments.
            ``type`` or ``object`` (exactly one), ``method_name`` (or
            ``method``), and optionally ``instance_method`` /
            ``class_method`` and an initial ``context``.
        locator: Method locator used for visibility and existence checks.
            Defaults to :func:`~pyweave.aop.locator.get_default_locator`.

    Raises:
        InvalidAttributesException: listing every violated rule at once.
    """

    NIL_OBJECT: ClassVar[NilObject] = NilObject()

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        locator: MethodLocator | None = None,
        **kwargs: Any,
    ) -> None:
        opts = {**(options or {}), **kwargs}

        self.target_type: Any = _first_given(opts, "type", "target_type")
        self.target_object: Any = _first_given(opts, "object", "target_object")
        self.method_name: Any = _first_given(opts, "method_name", "method")

        class_method = opts.get("class_method")
        class_method = False if class_method is None else bool(class_method)
        instance_method = opts.get("instance_method")
        self._instance_method = (not class_method) if instance_method is None else bool(instance_method)

        self.context: Context | None = opts.get("context")
        self.locator: MethodLocator = locator if locator is not None else get_default_locator()

        self.extra_options: dict[str, Any] = {}
        for key, value in opts.items():
            if key in _KNOWN_OPTIONS:
                continue
            self.extra_options[key] = value
            if key not in _RESERVED and not key.startswith("_") and not hasattr(type(self), key):
                setattr(self, key, value)

        self.visibility: Visibility | None = self._resolve_visibility()
        self._assert_valid(opts)

    # -- identity ----------------------------------------------------------

    @property
    def instance_method(self) -> bool:
        return self._instance_method

    @property
    def class_method(self) -> bool:
        return not self._instance_method

    @property
    def method_kind(self) -> MethodKind:
        return MethodKind.INSTANCE if self._instance_method else MethodKind.CLASS

    @property
    def instance_or_class_method(self) -> str:
        """``"instance"`` or ``"class"``."""
        return self.method_kind.value

    @property
    def target_type_or_object(self) -> Any:
        return self.target_type if self.target_type is not None else self.target_object

    type_or_object = target_type_or_object

    def describe(self) -> str:
        """Short label: ``Account#withdraw`` for instance methods, ``Account.open`` for class methods."""
        if self.target_type is not None:
            owner = self.target_type.__name__ if isinstance(self.target_type, type) else str(self.target_type)
        elif self.target_object is not None:
            owner = f"{type(self.target_object).__name__}<{id(self.target_object):#x}>"
        else:
            owner = "?"
        separator = "#" if self._instance_method else "."
        return f"{owner}{separator}{self.method_name}"

    # -- locator queries ---------------------------------------------------

    def _query(self, visibility: Visibility | None) -> MethodQuery:
        return MethodQuery(
            target=self.target_type_or_object,
            method_name=string_form(self.method_name),
            target_is_type=self.target_type is not None,
            visibility=visibility,
            method_kind=self.method_kind,
        )

    def _resolve_visibility(self) -> Visibility | None:
        # Join points may be declared for methods that do not exist yet, so
        # an unknown visibility is tolerated.
        if self.method_name is None or (self.target_type is None) == (self.target_object is None):
            return None
        return visibility_of(
            self.locator,
            self.target_type_or_object,
            string_form(self.method_name),
            self.method_kind,
            target_is_type=self.target_type is not None,
        )

    def exists(self) -> bool:
        """True iff the locator finds exactly one matching method.

        Raises:
            LocatorInvariantViolationException: the locator returned more
                than one result in total.
        """
        result = self.locator.find(self._query(self.visibility))
        if result.total > 1:
            raise LocatorInvariantViolationException(
                f"Method locator returned more than one item for {self.describe()}: {result!r}",
                context={"join_point": self.describe(), "result": result},
            )
        return len(result.matched) == 1

    # -- invocation --------------------------------------------------------

    def proceed(self, *args: Any, block: Callable[..., Any] | None = None) -> Any:
        """Forward to the next advice in the chain, or the original method.

        Only around advice gets a context with a forwarding handle; any other
        caller gets :class:`~pyweave.kernel.exceptions.ProceedNotAllowedException`.
        """
        if self.context is None:
            raise ProceedNotAllowedException(PROCEED_NOT_ALLOWED_MESSAGE, context={"join_point": self.describe()})
        return self.context._proceed(self, *args, block=block)

    def make_current_context_join_point(
        self,
        context_options: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> JoinPoint:
        """Derive a join point for one invocation of this location.

        The result shares this join point's identity but owns its context:
        a new one built from the options, or a copy of the current context
        with the options merged over it.
        """
        options = {**(context_options or {}), **kwargs}
        new_jp = copy.copy(self)
        if self.context is None:
            new_jp.context = Context(options)
        else:
            new_jp.context = copy.copy(self.context).update(options)
        logger.debug("Derived invocation context for %s (%s)", self.describe(), new_jp.context.advice_kind)
        return new_jp

    def __copy__(self) -> JoinPoint:
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone.extra_options = dict(self.extra_options)
        return clone

    def _assert_valid(self, options: Mapping[str, Any]) -> None:
        violations: list[str] = []
        if self.method_name is None:
            violations.append("Must specify a method_name.")
        if self.target_type is None and self.target_object is None:
            violations.append("Must specify either a type or object.")
        if self.target_type is not None and self.target_object is not None:
            violations.append("Can't specify both a type and object.")
        if violations:
            raise invalid_attributes(" ".join(violations), options, violations=violations)

    # -- ordering ----------------------------------------------------------

    def compare(self, other: Any) -> int:
        """Three-way comparison; ``target_object`` is compared by identity."""
        return three_way(self, other, JOIN_POINT_FIELDS)

    def __eq__(self, other: object) -> bool:
        if other is not None and not isinstance(other, JoinPoint):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, JoinPoint):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(
            (
                type(self).__qualname__,
                string_form(self.target_type),
                None if self.target_object is None else id(self.target_object),
                string_form(self.method_name),
                self._instance_method,
            )
        )

    def __repr__(self) -> str:
        return (
            f"JoinPoint: {{target_type = {self.target_type!r}, target_object = {self.target_object!r}, "
            f"method_name = {self.method_name}, instance_method? {self._instance_method}, "
            f"context = {self.context!r}}}"
        )


def _first_given(options: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = options.get(key)
        if value is not None:
            return value
    return None


def _compare_method_kind(a: JoinPoint, b: JoinPoint) -> int:
    # Not graded: any mismatch orders the left side after.
    return 0 if a.instance_method == b.instance_method else 1


def _compare_context(a: JoinPoint, b: JoinPoint) -> int:
    if a.context is None and b.context is None:
        return 0
    if a.context is None:
        return -1
    if b.context is None:
        return 1
    return a.context.compare(b.context)


JOIN_POINT_FIELDS = (
    FieldComparator("target_type", by_string),
    FieldComparator("target_object", by_identity),
    FieldComparator("method_name", by_string),
    _compare_method_kind,
    _compare_context,
)
