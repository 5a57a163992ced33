"""Fragment classification.

Decides whether a selection is a single method declaration (documented with
a Javadoc block) or anything else (documented with an inline comment).

Partial selections often come out of error recovery looking like exactly one
method declaration. A method-shaped match is therefore only trusted when the
tree shows no sign of recovery: no ERROR node around a bare identifier, and
no ERROR or MISSING node anywhere else, and no stray closing brace that ends
the wrapper class early. Any doubt resolves to Snippet.
"""
from typing import Optional

import tree_sitter

from code_summarizer.core.grammar import JavaGrammar, get_grammar
from code_summarizer.core.logging import get_logger
from code_summarizer.features.summarize.queries import (
    ERROR_IDENTIFIER,
    FORMAL_PARAMETER,
    METHOD_DECLARATION,
    VOID_RETURN,
    fragment_escapes_wrapper,
    has_recovered_syntax,
    run_query,
)
from code_summarizer.features.summarize.wrapper import wrap_fragment
from code_summarizer.models.summary import Classification

logger = get_logger(__name__)

VETO_NO_METHOD = "no_method"
VETO_MULTIPLE_METHODS = "multiple_methods"
VETO_ERROR_IDENTIFIER = "error_identifier"
VETO_RECOVERED_SYNTAX = "recovered_syntax"
VETO_ESCAPED_WRAPPER = "escaped_wrapper"


def classify_tree(tree: tree_sitter.Tree, grammar: Optional[JavaGrammar] = None) -> Classification:
    """Classify the parse tree of a wrapped fragment.

    Args:
        tree: Parse tree of a WrappedUnit
        grammar: Grammar the tree was parsed with

    Returns:
        Method classification with void-ness and parameter names, or Snippet
    """
    grammar = grammar or get_grammar()

    methods = run_query(METHOD_DECLARATION, tree, grammar)
    if len(methods) != 1:
        return Classification.snippet(VETO_NO_METHOD if not methods else VETO_MULTIPLE_METHODS)

    if run_query(ERROR_IDENTIFIER, tree, grammar):
        return Classification.snippet(VETO_ERROR_IDENTIFIER)

    if has_recovered_syntax(tree):
        return Classification.snippet(VETO_RECOVERED_SYNTAX)

    if fragment_escapes_wrapper(tree):
        return Classification.snippet(VETO_ESCAPED_WRAPPER)

    is_void = bool(run_query(VOID_RETURN, tree, grammar))
    param_names = [
        node.text
        for match in run_query(FORMAL_PARAMETER, tree, grammar)
        for node in match.captures.get("name", [])
    ]
    return Classification.method(is_void=is_void, param_names=param_names)


def classify_fragment(fragment: str, grammar: Optional[JavaGrammar] = None) -> Classification:
    """Wrap, parse and classify a raw selection.

    Never raises for malformed input; unparseable text is a Snippet.
    """
    grammar = grammar or get_grammar()
    unit = wrap_fragment(fragment)
    tree = grammar.parse(unit.text)
    classification = classify_tree(tree, grammar)

    logger.info(
        "fragment_classified",
        kind=classification.kind.value,
        is_void=classification.is_void,
        param_count=len(classification.param_names),
        veto_reason=classification.veto_reason,
        fragment_length=len(fragment),
    )
    return classification
