"""Fragment wrapping.

A selection is rarely a complete compilation unit. Wrapping it in an empty
class body makes any member declaration a child of the top-level declaration
list, so the full Java grammar can parse it.
"""
from code_summarizer.constants import GrammarDefaults
from code_summarizer.models.summary import WrappedUnit


def wrap_fragment(fragment: str) -> WrappedUnit:
    """Embed a selection in the smallest class declaration that can hold it.

    No validation is done; an invalid fragment still produces a wrapped unit
    whose parse tree contains error nodes.

    Args:
        fragment: Raw selection text

    Returns:
        WrappedUnit with the wrapper prefix length recorded
    """
    prefix = GrammarDefaults.WRAPPER_PREFIX
    return WrappedUnit(
        fragment=fragment,
        text=prefix + fragment + GrammarDefaults.WRAPPER_SUFFIX,
        prefix_length=len(prefix.encode("utf-8")),
    )
