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
"""NilObject — a do-nothing stand-in that absorbs any attribute access or call."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


class NilObject:
    """Null object: every attribute, call, or item lookup returns the same instance.

    Useful as a placeholder target where a real object is not available yet,
    e.g. a weaver building join points before the advised instance exists.
    It is falsy, empty, and equal only to other NilObjects.
    """

    __slots__ = ()

    def __getattr__(self, name: str) -> NilObject:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return self

    def __call__(self, *args: Any, **kwargs: Any) -> NilObject:
        return self

    def __getitem__(self, key: Any) -> NilObject:
        return self

    def __bool__(self) -> bool:
        return False

    def __len__(self) -> int:
        return 0

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NilObject)

    def __hash__(self) -> int:
        return hash(NilObject)

    def __repr__(self) -> str:
        return "NilObject"
