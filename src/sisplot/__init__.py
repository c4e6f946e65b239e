#######################################################################
# sisplot: a polar plotting language
#######################################################################

from arpeggio import ParserPython
from .grammar import sisplot_language, comment


# --- The parser ---

def getSisplotParser(debug=False):
    """Create a sisplot parser instance.

    Comments (``// ...`` and ``/* ... */``) are skipped as whitespace.

    Args:
        debug: If True, enable Arpeggio debug output (default: False)

    Returns:
        ParserPython instance configured for sisplot parsing
    """
    return ParserPython(
        sisplot_language, comment, reduce_tree=False,
        memoization=False, debug=debug
    )


# The public API needs getSisplotParser to already be defined.
from .program import parse, validate, execute, run  # noqa: E402

__all__ = [
    "getSisplotParser",
    "parse",
    "validate",
    "execute",
    "run",
]


# vim: set ts=4 sw=4 expandtab:
