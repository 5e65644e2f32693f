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
"""Tests for AOP enums."""

from __future__ import annotations

import pytest

from pyweave.aop.types import AdviceKind, MethodKind, Visibility


class TestAdviceKind:
    def test_members_compare_equal_to_strings(self) -> None:
        assert AdviceKind.AROUND == "around"
        assert AdviceKind.AFTER_RAISING == "after_raising"

    def test_str_is_value(self) -> None:
        assert str(AdviceKind.BEFORE) == "before"
        assert f"{AdviceKind.AFTER_RETURNING}" == "after_returning"

    def test_closed_set(self) -> None:
        assert {k.value for k in AdviceKind} == {"before", "after", "around", "after_returning", "after_raising"}


class TestVisibility:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("withdraw", Visibility.PUBLIC),
            ("__init__", Visibility.PUBLIC),
            ("_audit", Visibility.PROTECTED),
            ("_x__", Visibility.PROTECTED),
            ("__secret", Visibility.PRIVATE),
            ("_Account__secret", Visibility.PRIVATE),
        ],
    )
    def test_of(self, name: str, expected: Visibility) -> None:
        assert Visibility.of(name) is expected


class TestMethodKind:
    def test_filter_flag(self) -> None:
        assert MethodKind.INSTANCE.filter_flag == "instance_method_only"
        assert MethodKind.CLASS.filter_flag == "class_method_only"
