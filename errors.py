"""Exceptions raised by the algebra modules.

Numeric degeneracies (antipodal endpoints, zero-length axes) are not errors:
they take a documented fallback branch locally. Only operations that are
undefined for their input surface as exceptions.
"""


class DomainError(ValueError):
    """The operation is undefined for the given input (zero reciprocal, pole of tan, ...)."""


class ArgumentCountError(TypeError):
    """A value type was constructed from the wrong number or kind of components."""
