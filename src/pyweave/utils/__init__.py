"""Small shared utilities."""

from pyweave.utils.nil_object import NilObject

__all__ = ["NilObject"]
