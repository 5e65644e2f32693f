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
"""Join point and invocation context core for PyWeave aspects."""

from pyweave.aop.context import Context
from pyweave.aop.join_point import JoinPoint
from pyweave.aop.locator import (
    MethodDescriptor,
    MethodFinderResult,
    MethodLocator,
    MethodQuery,
    ReflectionMethodLocator,
    configure_locator,
    get_default_locator,
    set_default_locator,
)
from pyweave.aop.properties import LocatorProperties
from pyweave.aop.types import AdviceKind, MethodKind, Visibility

__all__ = [
    "AdviceKind",
    "Context",
    "JoinPoint",
    "LocatorProperties",
    "MethodDescriptor",
    "MethodFinderResult",
    "MethodKind",
    "MethodLocator",
    "MethodQuery",
    "ReflectionMethodLocator",
    "Visibility",
    "configure_locator",
    "get_default_locator",
    "set_default_locator",
]
