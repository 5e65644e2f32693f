"""PyWeave Logging — structlog setup and join point labels."""

from pyweave.logging.structlog_adapter import StructlogAdapter, advising, render_join_points

__all__ = ["StructlogAdapter", "advising", "render_join_points"]
