"""Process-wide Java grammar handle.

The compiled grammar ships with the tree-sitter-java wheel. It is loaded once,
on first use, and shared read-only afterwards. Parsers and query cursors are
created per invocation because tree-sitter parsers carry parse state.
"""
import threading
from typing import Dict, Optional

import tree_sitter
import tree_sitter_java

from code_summarizer.core.exceptions import GrammarLoadError
from code_summarizer.core.logging import get_logger
from code_summarizer.utils.text import to_source_bytes

logger = get_logger(__name__)


class JavaGrammar:
    """Loaded Java language plus the structural queries compiled against it."""

    def __init__(self, language: tree_sitter.Language) -> None:
        self.language = language
        self._queries: Dict[str, tree_sitter.Query] = {}
        self._lock = threading.Lock()

    def parse(self, source: str) -> tree_sitter.Tree:
        """Parse source text into a fresh, independent tree."""
        parser = tree_sitter.Parser(self.language)
        return parser.parse(to_source_bytes(source))

    def query(self, name: str, source: str) -> tree_sitter.Query:
        """Return the compiled query for ``name``, compiling it on first use.

        Raises:
            GrammarLoadError: If the query source does not compile against the grammar
        """
        compiled = self._queries.get(name)
        if compiled is not None:
            return compiled

        with self._lock:
            compiled = self._queries.get(name)
            if compiled is None:
                try:
                    compiled = tree_sitter.Query(self.language, source)
                except (tree_sitter.QueryError, ValueError) as e:
                    raise GrammarLoadError(f"Query '{name}' does not compile: {e}") from e
                self._queries[name] = compiled
                logger.debug("query_compiled", query=name)
        return compiled


_grammar: Optional[JavaGrammar] = None
_grammar_lock = threading.Lock()


def get_grammar() -> JavaGrammar:
    """Get the shared Java grammar, loading it on first call.

    Raises:
        GrammarLoadError: If the bundled grammar cannot be loaded
    """
    global _grammar
    if _grammar is not None:
        return _grammar

    with _grammar_lock:
        if _grammar is None:
            try:
                language = tree_sitter.Language(tree_sitter_java.language())
            except (TypeError, ValueError, OSError) as e:
                raise GrammarLoadError(f"Failed to load the Java grammar: {e}") from e
            _grammar = JavaGrammar(language)
            logger.info("grammar_loaded", language="java", abi_version=getattr(language, "abi_version", None))
    return _grammar
