"""Exceptions raised by bough itself (test-code failures are reported as data)."""


class BoughError(Exception):
    """Base class for framework errors."""


class SuiteDefinitionError(BoughError, TypeError):
    """A suite was declared with an entry the builder does not understand."""


class SuiteLoadError(BoughError):
    """A ``module:attribute`` target could not be resolved to a Group."""


class OrderingError(BoughError, ValueError):
    """An ordering policy returned something other than a permutation of its input."""
