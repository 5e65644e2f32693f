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
"""Structlog setup for weaver and advice logging.

``StructlogAdapter.configure`` installs a processor chain that renders join
points and contexts as short labels. ``advising`` tags every log line
emitted inside an advice call with the join point being advised.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from pyweave.aop.context import Context
from pyweave.aop.join_point import JoinPoint
from pyweave.core.config import Config

_LEVELS = logging.getLevelNamesMapping()


def render_join_points(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Processor that flattens JoinPoint and Context values to short labels.

    Join points render as ``Type#method`` (instance methods) or
    ``Type.method`` (class methods); contexts as ``Context(<advice kind>)``.
    """
    for key, value in event_dict.items():
        if isinstance(value, JoinPoint):
            event_dict[key] = value.describe()
        elif isinstance(value, Context):
            event_dict[key] = f"Context({value.advice_kind})"
    return event_dict


@contextmanager
def advising(join_point: JoinPoint) -> Iterator[None]:
    """Bind the join point and its advice kind to structlog contextvars."""
    bound: dict[str, Any] = {"join_point": join_point.describe()}
    if join_point.context is not None:
        bound["advice_kind"] = str(join_point.context.advice_kind)
    with structlog.contextvars.bound_contextvars(**bound):
        yield


class StructlogAdapter:
    """Configures structlog and stdlib levels from ``pyweave.logging``."""

    def __init__(self) -> None:
        self.root_level = "INFO"
        self.json = False
        self.module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        levels = {name: str(level).upper() for name, level in config.get_section("pyweave.logging.level").items()}
        self.root_level = levels.pop("root", "INFO")
        self.module_levels = levels
        self.json = str(config.get("pyweave.logging.format", "console")).lower() == "json"

        renderer = structlog.processors.JSONRenderer() if self.json else structlog.dev.ConsoleRenderer()
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                render_join_points,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                renderer,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s", stream=sys.stdout, level=_LEVELS.get(self.root_level, logging.INFO), force=True
        )
        for name, level in self.module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_LEVELS.get(level.upper(), logging.INFO))
