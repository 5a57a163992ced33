"""Data models for fragment classification and comment synthesis."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from code_summarizer.utils.text import to_source_bytes


class ClassificationKind(Enum):
    """Which comment shape a fragment gets."""

    METHOD = "method"
    SNIPPET = "snippet"


@dataclass(frozen=True)
class WrappedUnit:
    """A selection embedded in a synthetic class so the full grammar can parse it.

    Attributes:
        fragment: Original selection text
        text: Fragment surrounded by the wrapper declaration
        prefix_length: Byte length of the wrapper text preceding the fragment
    """

    fragment: str
    text: str
    prefix_length: int

    def to_fragment_span(self, start_byte: int, end_byte: int) -> Tuple[int, int]:
        """Map a wrapped-unit byte span back onto the fragment.

        Spans that fall inside the wrapper itself are clamped to the fragment
        bounds.
        """
        limit = len(to_source_bytes(self.fragment))
        start = min(max(start_byte - self.prefix_length, 0), limit)
        end = min(max(end_byte - self.prefix_length, 0), limit)
        return start, end


@dataclass(frozen=True)
class CapturedNode:
    """Grammar-independent view of a captured syntax node.

    Attributes:
        node_type: Grammar node type (e.g. "identifier", "ERROR")
        text: Source text covered by the node
        start_byte: Start offset in wrapped-unit coordinates
        end_byte: End offset in wrapped-unit coordinates
    """

    node_type: str
    text: str
    start_byte: int
    end_byte: int


@dataclass(frozen=True)
class QueryMatch:
    """One match of a structural query.

    Attributes:
        query_name: Name of the query in the query table
        captures: Capture name to captured nodes
    """

    query_name: str
    captures: Dict[str, List[CapturedNode]] = field(default_factory=dict)

    def first(self, capture_name: str) -> Optional[CapturedNode]:
        nodes = self.captures.get(capture_name)
        return nodes[0] if nodes else None

    @property
    def start_byte(self) -> int:
        starts = [node.start_byte for nodes in self.captures.values() for node in nodes]
        return min(starts) if starts else 0


@dataclass(frozen=True)
class Classification:
    """Result of classifying a fragment.

    Attributes:
        kind: METHOD or SNIPPET
        is_void: Whether the method's return type is void (always False for snippets)
        param_names: Declared parameter names in source order, duplicates kept
        veto_reason: Why a fragment is not a method, for diagnostics
    """

    kind: ClassificationKind
    is_void: bool = False
    param_names: Tuple[str, ...] = ()
    veto_reason: Optional[str] = None

    @classmethod
    def method(cls, is_void: bool, param_names: List[str]) -> "Classification":
        return cls(kind=ClassificationKind.METHOD, is_void=is_void, param_names=tuple(param_names))

    @classmethod
    def snippet(cls, veto_reason: Optional[str] = None) -> "Classification":
        return cls(kind=ClassificationKind.SNIPPET, veto_reason=veto_reason)

    @property
    def is_method(self) -> bool:
        return self.kind is ClassificationKind.METHOD

    def to_dict(self) -> Dict[str, object]:
        return {
            "kind": self.kind.value,
            "is_void": self.is_void,
            "param_names": list(self.param_names),
            "veto_reason": self.veto_reason,
        }


@dataclass(frozen=True)
class SynthesizedComment:
    """Comment text ready for insertion at the selection start.

    Attributes:
        text: Rendered comment, always newline-terminated
        kind: Classification the comment was rendered for
        indent_column: Column of the selection start
    """

    text: str
    kind: ClassificationKind
    indent_column: int = 0

    @property
    def insertion_text(self) -> str:
        """Comment followed by the indentation the selected code started at.

        Inserting at the selection start pushes the selected code onto a new
        line; the trailing spaces put it back on its original column.
        """
        return self.text + " " * self.indent_column


@dataclass(frozen=True)
class SummaryResult:
    """Outcome of one summarize invocation.

    Attributes:
        comment: Synthesized comment
        classification: Fragment classification
        normalized_code: Text that was sent to the description service
        description: Raw description returned by the service
        execution_time_ms: Wall time of the whole pipeline
    """

    comment: SynthesizedComment
    classification: Classification
    normalized_code: str
    description: str
    execution_time_ms: int = 0
