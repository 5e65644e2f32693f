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
"""AOP core enums — advice kinds, method visibility, and method kinds."""

from __future__ import annotations

from enum import Enum


class AdviceKind(str, Enum):
    """Category of advice running against a join point.

    String-valued so that ``AdviceKind.AROUND == "around"`` holds.
    """

    BEFORE = "before"
    AFTER = "after"
    AROUND = "around"
    AFTER_RETURNING = "after_returning"
    AFTER_RAISING = "after_raising"

    def __str__(self) -> str:
        return self.value


class Visibility(str, Enum):
    """Declared visibility of a method, derived from Python naming conventions."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def of(cls, method_name: str) -> Visibility:
        """Classify *method_name*.

        * ``__dunder__`` names and names without a leading underscore are public.
        * ``__mangled`` names (and their ``_Owner__mangled`` form) are private.
        * ``_single`` underscore names are protected.
        """
        if method_name.startswith("__") and method_name.endswith("__"):
            return cls.PUBLIC
        if method_name.startswith("__"):
            return cls.PRIVATE
        if method_name.startswith("_"):
            owner, sep, rest = method_name[1:].partition("__")
            if sep and owner and rest and not rest.endswith("__"):
                return cls.PRIVATE
            return cls.PROTECTED
        return cls.PUBLIC


class MethodKind(str, Enum):
    """Whether a join point addresses an instance method or a class-level method."""

    INSTANCE = "instance"
    CLASS = "class"

    def __str__(self) -> str:
        return self.value

    @property
    def filter_flag(self) -> str:
        """Locator filter tag: ``"instance_method_only"`` or ``"class_method_only"``."""
        return f"{self.value}_method_only"
