"""Error taxonomy shared by the parser, the tableau and the stepper."""


class SimplexError(Exception):
    """Base class for every error raised by simplex_stepper."""


class ParseError(SimplexError, ValueError):
    """Objective or constraint text could not be read."""


class DomainError(SimplexError, ArithmeticError):
    """An algebraic operation was asked for something undefined.

    Raised when solving an expression for a variable whose coefficient is zero,
    or when a coefficient is NaN or infinite.
    """


class Unbounded(SimplexError):
    """The objective can grow without limit along the entering variable."""


class AlreadyOptimal(SimplexError):
    """No improving pivot exists; the frontier dictionary is final."""


class InvalidState(SimplexError):
    """A vertex was read from a dictionary that is not feasible."""
