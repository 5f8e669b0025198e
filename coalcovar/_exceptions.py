"""
_exceptions.py
==============
Exception hierarchy for coalcovar.

Every fatal condition in a run raises one of these.  Nothing is caught and
retried inside the library: the command line front end turns them into a
message on stderr and a non-zero exit status.
"""


class CoalcovarError(Exception):
    """
    Base class for all coalcovar errors.
    """


class NewickParseError(CoalcovarError, ValueError):
    """
    A tree line is not a well-formed binary Newick string.

    Attributes
    ----------
    line : str
        The line being parsed.
    position : int
        Zero-based index of the character where parsing failed.  Equal to
        ``len(line)`` when the line ended early.
    """

    def __init__(self, message: str, line: str = "", position: int = -1) -> None:
        if position >= 0:
            message = f"{message} (at position {position})"
        super().__init__(message)
        self.line = line
        self.position = position


# Short alias used in the public API
ParseError = NewickParseError


class TimeConsistencyError(CoalcovarError):
    """
    A derived inter-coalescence interval was negative.
    """

    def __init__(self, message: str = "Error in times") -> None:
        super().__init__(message)


class SampleSizeError(CoalcovarError):
    """
    A sample does not have the interval count the accumulator was sized for.
    """


class MsFormatError(CoalcovarError):
    """
    The input stream does not look like simulator output.
    """


class NoSamplesError(CoalcovarError):
    """
    A result was requested before any sample was accumulated.
    """
