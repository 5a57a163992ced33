"""Structural query engine.

A fixed table of named tree-sitter queries is evaluated against the parse
tree of a wrapped fragment. Results are reported as grammar-independent
``QueryMatch`` objects so the classifier never touches tree-sitter nodes.
The engine only reports what matched; deciding what the matches mean is the
classifier's job.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import tree_sitter

from code_summarizer.constants import GrammarDefaults
from code_summarizer.core.exceptions import UnknownQueryError
from code_summarizer.core.grammar import JavaGrammar, get_grammar
from code_summarizer.core.logging import get_logger
from code_summarizer.models.summary import CapturedNode, QueryMatch

logger = get_logger(__name__)

METHOD_DECLARATION = "method_declaration"
ERROR_IDENTIFIER = "error_identifier"
VOID_RETURN = "void_return"
FORMAL_PARAMETER = "formal_parameter"


@dataclass(frozen=True)
class StructuralQuery:
    """A named declarative pattern.

    Attributes:
        name: Key in the query table
        source: tree-sitter query source for the Java grammar
        primary_capture: Capture whose position orders the matches
        description: What the pattern looks for
    """

    name: str
    source: str
    primary_capture: str
    description: str


QUERY_TABLE: Dict[str, StructuralQuery] = {
    METHOD_DECLARATION: StructuralQuery(
        name=METHOD_DECLARATION,
        source="""
(method_declaration
  type: (_) @return_type
  name: (identifier) @name
  parameters: (formal_parameters) @parameters) @method
""",
        primary_capture="method",
        description="Named method with a return type and a parameter list",
    ),
    ERROR_IDENTIFIER: StructuralQuery(
        name=ERROR_IDENTIFIER,
        source="""
(ERROR (identifier) @identifier) @error
""",
        primary_capture="error",
        description="Error-recovery node holding a bare identifier",
    ),
    VOID_RETURN: StructuralQuery(
        name=VOID_RETURN,
        source="""
(method_declaration
  type: (void_type) @void_type) @method
""",
        primary_capture="method",
        description="Method declaration returning void",
    ),
    FORMAL_PARAMETER: StructuralQuery(
        name=FORMAL_PARAMETER,
        source="""
(method_declaration
  parameters: (formal_parameters
    (formal_parameter
      name: (identifier) @name)))

(method_declaration
  parameters: (formal_parameters
    (spread_parameter
      (variable_declarator
        name: (identifier) @name))))
""",
        primary_capture="name",
        description="Declared name of each method parameter, varargs included",
    ),
}


def _to_captured_node(node: tree_sitter.Node) -> CapturedNode:
    raw = node.text or b""
    return CapturedNode(
        node_type=node.type,
        text=raw.decode("utf-8", errors="replace"),
        start_byte=node.start_byte,
        end_byte=node.end_byte,
    )


def _sort_key(match: QueryMatch, primary_capture: str) -> int:
    primary = match.first(primary_capture)
    return primary.start_byte if primary is not None else match.start_byte


def run_query(name: str, tree: tree_sitter.Tree, grammar: Optional[JavaGrammar] = None) -> List[QueryMatch]:
    """Evaluate one named query against a parse tree.

    Args:
        name: Query name from QUERY_TABLE
        tree: Parse tree of a wrapped fragment
        grammar: Grammar the tree was parsed with (shared grammar by default)

    Returns:
        Matches in source order of their primary capture

    Raises:
        UnknownQueryError: If the name is not in the query table
    """
    structural = QUERY_TABLE.get(name)
    if structural is None:
        raise UnknownQueryError(name)

    grammar = grammar or get_grammar()
    query = grammar.query(structural.name, structural.source)
    cursor = tree_sitter.QueryCursor(query)

    matches = []
    for _pattern_idx, captures in cursor.matches(tree.root_node):
        matches.append(
            QueryMatch(
                query_name=name,
                captures={
                    capture_name: [_to_captured_node(node) for node in nodes]
                    for capture_name, nodes in captures.items()
                },
            )
        )

    matches.sort(key=lambda m: _sort_key(m, structural.primary_capture))
    logger.debug("query_executed", query=name, match_count=len(matches))
    return matches


def run_queries(
    tree: tree_sitter.Tree,
    names: Optional[Iterable[str]] = None,
    grammar: Optional[JavaGrammar] = None,
) -> Dict[str, List[QueryMatch]]:
    """Evaluate several named queries (all of them by default)."""
    selected = list(names) if names is not None else list(QUERY_TABLE)
    return {name: run_query(name, tree, grammar) for name in selected}


def has_recovered_syntax(tree: tree_sitter.Tree) -> bool:
    """Whether the parser had to recover anywhere (ERROR or MISSING nodes)."""
    return bool(tree.root_node.has_error)


def fragment_escapes_wrapper(tree: tree_sitter.Tree) -> bool:
    """Whether the fragment closed the wrapper class and added top-level code.

    An intact wrapped unit has exactly one top-level node: the wrapper class.
    """
    top_level = tree.root_node.named_children
    if len(top_level) != 1 or top_level[0].type != "class_declaration":
        return True
    name = top_level[0].child_by_field_name("name")
    return name is None or name.text != GrammarDefaults.WRAPPER_CLASS_NAME.encode("utf-8")
