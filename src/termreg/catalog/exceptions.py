"""Exceptions for the Catalog module."""


class PrerequisiteCycleError(ValueError):
    """Course appears among its own (transitive) prerequisites."""
