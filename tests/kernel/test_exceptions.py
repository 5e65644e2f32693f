"""Tests for PyWeave kernel exception hierarchy."""

from pyweave.kernel.exceptions import (
    AspectException,
    InvalidAttributesException,
    LocatorInvariantViolationException,
    ProceedNotAllowedException,
    PyWeaveException,
)


class TestPyWeaveException:
    def test_basic_creation(self):
        exc = PyWeaveException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_error_code(self):
        exc = PyWeaveException("bad", code="CUSTOM_001")
        assert exc.code == "CUSTOM_001"

    def test_context_defaults_to_empty_dict(self):
        exc = PyWeaveException("test")
        exc.context["key"] = "value"
        exc2 = PyWeaveException("test2")
        assert exc2.context == {}


class TestAspectExceptions:
    def test_invalid_attributes_code(self):
        exc = InvalidAttributesException("Invalid attributes.", context={"options": {}})
        assert exc.code == "INVALID_ATTRIBUTES"
        assert exc.context == {"options": {}}

    def test_proceed_not_allowed_code(self):
        assert ProceedNotAllowedException("nope").code == "PROCEED_NOT_ALLOWED"

    def test_locator_invariant_code(self):
        assert LocatorInvariantViolationException("two results").code == "LOCATOR_INVARIANT"


class TestExceptionHierarchy:
    def test_aspect_is_pyweave(self):
        assert issubclass(AspectException, PyWeaveException)

    def test_invalid_attributes_is_aspect(self):
        assert issubclass(InvalidAttributesException, AspectException)

    def test_proceed_not_allowed_is_aspect(self):
        assert issubclass(ProceedNotAllowedException, AspectException)

    def test_locator_invariant_is_not_aspect(self):
        assert issubclass(LocatorInvariantViolationException, PyWeaveException)
        assert not issubclass(LocatorInvariantViolationException, AspectException)

    def test_catch_all_pyweave_exceptions(self):
        exceptions = [
            InvalidAttributesException("bad"),
            ProceedNotAllowedException("no"),
            LocatorInvariantViolationException("broken"),
        ]
        for exc in exceptions:
            try:
                raise exc
            except PyWeaveException as caught:
                assert caught is exc
