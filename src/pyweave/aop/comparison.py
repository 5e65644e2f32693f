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
"""Three-way comparison primitives and per-field comparator tables.

JoinPoint and Context order themselves field by field, stopping at the first
field that differs. Which fields compare by *identity* and which by *value*
is fixed here, in one table per type::

    CONTEXT_FIELDS = (
        FieldComparator("advice_kind", by_value),
        FieldComparator("advised_object", by_identity),
        ...
    )

Every comparator returns ``-1``, ``0`` or ``1``. ``None`` always sorts first.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

Comparator = Callable[[Any, Any], int]


def _sign(less: bool) -> int:
    return -1 if less else 1


def _none_first(a: Any, b: Any) -> int | None:
    """Resolve the ordering when either side is None, else return None."""
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    return None


def _fallback_key(value: Any) -> tuple[str, str]:
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}", repr(value)


def by_value(a: Any, b: Any) -> int:
    """Compare by ``==`` and ``<``.

    Values that cannot be ordered against each other (``TypeError`` from
    ``<``, or neither ``a < b`` nor ``b < a`` as with sets and NaN) fall back
    to ordering by type name, then ``repr``.
    """
    resolved = _none_first(a, b)
    if resolved is not None:
        return resolved
    try:
        if a == b:
            return 0
        if a < b:
            return -1
        if b < a:
            return 1
    except TypeError:
        pass
    ka, kb = _fallback_key(a), _fallback_key(b)
    if ka == kb:
        return 0
    return _sign(ka < kb)


def by_identity(a: Any, b: Any) -> int:
    """Compare by object identity; distinct but equal objects are not equal."""
    if a is b:
        return 0
    resolved = _none_first(a, b)
    if resolved is not None:
        return resolved
    return _sign(id(a) < id(b))


def string_form(value: Any) -> str:
    """String form used for name-like fields; ``None`` becomes ``""``."""
    if value is None:
        return ""
    if isinstance(value, type):
        return f"{value.__module__}.{value.__qualname__}"
    return str(value)


def by_string(a: Any, b: Any) -> int:
    """Compare the string forms of *a* and *b*."""
    sa, sb = string_form(a), string_form(b)
    if sa == sb:
        return 0
    return _sign(sa < sb)


def by_runtime_type(a: Any, b: Any) -> int:
    """Compare the runtime classes of *a* and *b* by qualified name."""
    if type(a) is type(b):
        return 0
    return by_string(type(a), type(b))


@dataclass(frozen=True)
class FieldComparator:
    """One row of a comparator table: an attribute name and how to compare it."""

    attribute: str
    compare: Comparator

    def __call__(self, a: Any, b: Any) -> int:
        return self.compare(getattr(a, self.attribute, None), getattr(b, self.attribute, None))


def compare_fields(a: Any, b: Any, table: Sequence[Callable[[Any, Any], int]]) -> int:
    """Run *table* against *a* and *b*, returning the first non-zero result."""
    for comparator in table:
        result = comparator(a, b)
        if result != 0:
            return result
    return 0


def three_way(a: Any, b: Any, table: Sequence[Callable[[Any, Any], int]]) -> int:
    """Full three-way comparison: identity short-circuit, ``None`` last, then *table*."""
    if a is b:
        return 0
    if b is None:
        return 1
    result = by_runtime_type(a, b)
    if result != 0:
        return result
    return compare_fields(a, b, table)
