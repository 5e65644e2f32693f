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
"""Context — per-invocation state for advice running at a join point."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from pyweave.aop.comparison import FieldComparator, by_identity, by_value, three_way
from pyweave.aop.types import AdviceKind
from pyweave.kernel.exceptions import InvalidAttributesException, ProceedNotAllowedException

if TYPE_CHECKING:
    from pyweave.aop.join_point import JoinPoint

logger = logging.getLogger(__name__)

_ATTRIBUTES = frozenset(
    {
        "advice_kind",
        "advised_object",
        "parameters",
        "block_for_method",
        "returned_value",
        "raised_exception",
    }
)

_ALIASES = {"target_object": "advised_object"}

# Checked in order; the first missing attribute is reported alone.
_REQUIRED = (
    ("advice_kind", "Must specify an advice_kind"),
    ("advised_object", "Must specify an advised_object"),
    ("parameters", "Must specify parameters"),
)

PROCEED_NOT_ALLOWED_MESSAGE = (
    'It looks like you tried to call "JoinPoint.proceed" from within advice that isn\'t "around" advice. '
    "Only around advice can call proceed. (Specific error: proceed cannot be called because no "
    '"proceed_proc" was bound on the corresponding Context object.)'
)


def invalid_attributes(message: str, options: Mapping[str, Any], **context: Any) -> InvalidAttributesException:
    """Build the error raised when JoinPoint or Context options fail validation."""
    return InvalidAttributesException(
        f"Invalid attributes. {message.rstrip('.')}. Options were: {dict(options)!r}",
        context={"options": dict(options), **context},
    )


def _coerce_advice_kind(value: Any) -> Any:
    if isinstance(value, str) and not isinstance(value, AdviceKind):
        try:
            return AdviceKind(value)
        except ValueError:
            return value
    return value


@functools.total_ordering
class Context:
    """Mutable state for one invocation of an intercepted method.

    Built from an options bag by the weaver, one per call. ``advice_kind``,
    ``advised_object`` (alias ``target_object``) and ``parameters`` are
    required; ``block_for_method``, ``returned_value``, ``raised_exception``
    and the forwarding handle ``proceed_proc`` are optional. Unknown keys are
    kept in :attr:`extra_options`.

    The forwarding handle is write-only: it can be bound through the options
    bag but only ever invoked, through :meth:`JoinPoint.proceed`.
    """

    def __init__(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        self.advice_kind: Any = None
        self.advised_object: Any = None
        self.parameters: Any = None
        self.block_for_method: Callable[..., Any] | None = None
        self.returned_value: Any = None
        self.raised_exception: BaseException | None = None
        self.extra_options: dict[str, Any] = {}
        self._proceed_proc: Callable[..., Any] | None = None

        merged = {**(options or {}), **kwargs}
        self.update(merged)
        self._assert_valid(merged)

    @property
    def target_object(self) -> Any:
        return self.advised_object

    @target_object.setter
    def target_object(self, value: Any) -> None:
        self.advised_object = value

    @property
    def can_proceed(self) -> bool:
        """True when a forwarding handle is bound (i.e. this is around advice)."""
        return self._proceed_proc is not None

    def update(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> Context:
        """Merge option keys into this context without re-validating."""
        for key, value in {**(options or {}), **kwargs}.items():
            key = _ALIASES.get(key, key)
            if key == "proceed_proc":
                self._proceed_proc = value
            elif key == "advice_kind":
                self.advice_kind = _coerce_advice_kind(value)
            elif key in _ATTRIBUTES:
                setattr(self, key, value)
            else:
                self.extra_options[key] = value
                if key != "extra_options" and not key.startswith("_") and not hasattr(type(self), key):
                    setattr(self, key, value)
        return self

    def _proceed(self, calling_join_point: JoinPoint, *args: Any, block: Callable[..., Any] | None = None) -> Any:
        """Forward to the next advice or the original method.

        Reached through :meth:`JoinPoint.proceed` only. With no *args* the
        original ``parameters`` are forwarded. A *block* replaces
        ``block_for_method`` on the calling join point's context before the
        handle runs.
        """
        if self._proceed_proc is None:
            raise ProceedNotAllowedException(
                PROCEED_NOT_ALLOWED_MESSAGE,
                context={"advice_kind": self.advice_kind},
            )
        if not args:
            args = tuple(self.parameters)
        if block is not None:
            calling_join_point.context.block_for_method = block
        logger.debug("Proceeding from %s advice with %d argument(s)", self.advice_kind, len(args))
        return self._proceed_proc(calling_join_point, *args)

    def __copy__(self) -> Context:
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone.extra_options = dict(self.extra_options)
        return clone

    def _assert_valid(self, options: Mapping[str, Any]) -> None:
        for attribute, message in _REQUIRED:
            if getattr(self, attribute) is None:
                raise invalid_attributes(message, options, violations=[message])

    # -- ordering ----------------------------------------------------------

    def compare(self, other: Any) -> int:
        """Three-way comparison; the advised object is compared by identity."""
        return three_way(self, other, CONTEXT_FIELDS)

    def __eq__(self, other: object) -> bool:
        if other is not None and not isinstance(other, Context):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Context):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((type(self).__qualname__, id(self.advised_object)))

    def __repr__(self) -> str:
        return (
            f"Context(advice_kind={self.advice_kind!r}, advised_object={self.advised_object!r}, "
            f"parameters={self.parameters!r}, block_for_method={self.block_for_method!r}, "
            f"returned_value={self.returned_value!r}, raised_exception={self.raised_exception!r}, "
            f"can_proceed={self.can_proceed})"
        )


CONTEXT_FIELDS = (
    FieldComparator("advice_kind", by_value),
    FieldComparator("advised_object", by_identity),
    FieldComparator("parameters", by_value),
    FieldComparator("returned_value", by_value),
    FieldComparator("raised_exception", by_value),
)
