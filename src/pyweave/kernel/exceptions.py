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
"""Unified exception hierarchy for PyWeave.

All framework exceptions inherit from PyWeaveException, enabling unified
error handling across modules.

Categories:
- AspectException: Join point and context misuse (bad attributes, illegal proceed)
- LocatorInvariantViolationException: A method locator broke its contract
"""

from __future__ import annotations

# =============================================================================
# Base Exception
# =============================================================================


class PyWeaveException(Exception):
    """Base exception for all PyWeave errors.

    Carries an optional error code and context dict for structured error data.
    Catch PyWeaveException to handle all framework errors, or catch specific
    subclasses for targeted handling.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "INVALID_ATTRIBUTES").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Aspect Exceptions
# =============================================================================


class AspectException(PyWeaveException):
    """Errors raised by the join point and invocation context core."""


class InvalidAttributesException(AspectException):
    """A JoinPoint or Context was built from missing or conflicting attributes."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="INVALID_ATTRIBUTES", context=context)


class ProceedNotAllowedException(AspectException):
    """``proceed`` was called on a context with no forwarding handle bound."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="PROCEED_NOT_ALLOWED", context=context)


# =============================================================================
# Collaborator Contract Violations
# =============================================================================


class LocatorInvariantViolationException(PyWeaveException):
    """A method locator returned more than one result for a single query.

    Signals a broken collaborator, not a user error. Not an AspectException:
    handlers for aspect errors must not catch it.
    """

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="LOCATOR_INVARIANT", context=context)
