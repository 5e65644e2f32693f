"""Tests for structlog configuration and join point log labels."""

import logging

import structlog

from pyweave.aop.context import Context
from pyweave.aop.join_point import JoinPoint
from pyweave.aop.locator import MethodFinderResult
from pyweave.core.config import Config
from pyweave.logging import StructlogAdapter, advising, render_join_points


class _EmptyLocator:
    def find(self, query):
        return MethodFinderResult()


class Account:
    def withdraw(self, amount):
        return amount

    @classmethod
    def open(cls):
        return cls()


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter.root_level == "INFO"
        assert adapter.json is False

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"pyweave": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter.root_level == "DEBUG"

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"pyweave": {"logging": {"format": "JSON"}}}))
        assert adapter.json is True

    def test_configure_reads_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"pyweave": {"logging": {"level": {"root": "INFO", "myapp.weaving": "DEBUG"}}}})
        adapter.configure(config)
        assert adapter.module_levels == {"myapp.weaving": "DEBUG"}
        assert logging.getLogger("myapp.weaving").level == logging.DEBUG

    def test_env_overrides_format(self, monkeypatch):
        monkeypatch.setenv("PYWEAVE_LOGGING_FORMAT", "json")
        adapter = StructlogAdapter()
        adapter.configure(Config({"pyweave": {"logging": {"format": "console"}}}))
        assert adapter.json is True


class TestStructlogAdapterLoggers:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("myapp.aspects")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "debug", None))

    def test_set_level_updates_stdlib_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        adapter.set_level("myapp.aspects", "warning")
        assert logging.getLogger("myapp.aspects").level == logging.WARNING


class TestRenderJoinPoints:
    def test_instance_method_join_point_uses_hash(self):
        jp = JoinPoint(type=Account, method_name="withdraw", locator=_EmptyLocator())
        event = render_join_points(None, "info", {"event": "advising", "jp": jp})
        assert event["jp"] == "Account#withdraw"
        assert event["event"] == "advising"

    def test_class_method_join_point_uses_dot(self):
        jp = JoinPoint(type=Account, method_name="open", class_method=True, locator=_EmptyLocator())
        assert render_join_points(None, "info", {"jp": jp})["jp"] == "Account.open"

    def test_context_rendered_with_advice_kind(self):
        ctx = Context(advice_kind="before", advised_object=object(), parameters=[])
        event = render_join_points(None, "info", {"ctx": ctx})
        assert event["ctx"] == "Context(before)"

    def test_other_values_untouched(self):
        event = render_join_points(None, "info", {"n": 1, "s": "x"})
        assert event == {"n": 1, "s": "x"}


class TestAdvising:
    def test_binds_join_point_and_advice_kind(self):
        account = Account()
        jp = JoinPoint(type=Account, method_name="withdraw", locator=_EmptyLocator())
        per_call = jp.make_current_context_join_point(
            {"advice_kind": "around", "advised_object": account, "parameters": [10]}
        )

        with advising(per_call):
            bound = structlog.contextvars.get_contextvars()
            assert bound["join_point"] == "Account#withdraw"
            assert bound["advice_kind"] == "around"

        assert "join_point" not in structlog.contextvars.get_contextvars()

    def test_join_point_without_context(self):
        jp = JoinPoint(type=Account, method_name="withdraw", locator=_EmptyLocator())

        with advising(jp):
            assert "advice_kind" not in structlog.contextvars.get_contextvars()
