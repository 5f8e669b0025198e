"""
_msfile.py
==========
Reading tree samples from coalescent simulator output.

The expected layout is the one written by ``ms``-style simulators run with
tree output enabled: a free-form header (command line, random seeds, ...)
ending at a line that is exactly ``//``, followed by one NEWICK tree per
line.  Later ``//`` separator lines and blank lines are skipped.
"""

import logging
from typing import Iterable, Iterator

from coalcovar._exceptions import MsFormatError


logger = logging.getLogger(__name__)

SEPARATOR = "//"


def iter_ms_trees(lines: Iterable[str]) -> Iterator[str]:
    """
    Yield the tree lines of a simulator output stream, stripped of
    surrounding whitespace.

    Parameters
    ----------
    lines : iterable of str
        An open text file or any iterable of lines.

    Yields
    ------
    str
        One NEWICK string per sample.

    Raises
    ------
    MsFormatError
        If the stream ends before a ``//`` line is seen.

    Examples
    --------
    >>> list(iter_ms_trees(['ms 3 1 -T', '1 2 3', '', '//', '(1:1,(2:.5,3:.5):.5);']))
    ['(1:1,(2:.5,3:.5):.5);']
    """
    it = iter(lines)

    n_header = 0
    for line in it:
        if line.strip() == SEPARATOR:
            break
        n_header += 1
    else:
        raise MsFormatError(
            f"No '{SEPARATOR}' line found after {n_header} line(s); "
            f"input does not look like simulator output"
        )
    logger.debug("Skipped %d header line(s)", n_header)

    for line in it:
        line = line.strip()
        if line and line != SEPARATOR:
            yield line
