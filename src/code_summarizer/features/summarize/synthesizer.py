"""Comment synthesis.

Turns a classification and a description into comment text that can be
inserted at the start of the selection:

    /** Auto-generated summary, review before committing.
     * <description>
     *
     * @param <name>
     * @return
     */

Snippets get a single ``// <description>`` line instead.
"""
import re

from code_summarizer.constants import CommentDefaults
from code_summarizer.models.summary import Classification, ClassificationKind, SynthesizedComment
from code_summarizer.utils.text import collapse_line_breaks

# Backslash run that javac would read as the start of a \uXXXX escape
_UNICODE_ESCAPE_LEAD = re.compile(r"\\+(?=u+[0-9A-Fa-f]{4})")


def _defuse_unicode_escapes(text: str, kind: ClassificationKind) -> str:
    # javac decodes unicode escapes before it finds comment boundaries:
    # *\u002f closes a block and \u000a ends a line comment.
    if kind is ClassificationKind.METHOD:
        return _UNICODE_ESCAPE_LEAD.sub(lambda m: CommentDefaults.BACKSLASH_ENTITY * len(m.group()), text)
    # An escape only counts after an even number of backslashes; doubling the run makes it odd
    return _UNICODE_ESCAPE_LEAD.sub(lambda m: m.group() * 2, text)


def sanitize_description(description: str, kind: ClassificationKind) -> str:
    """Make untrusted description text safe to embed in a comment.

    Line breaks become spaces so the text cannot leave an inline comment or
    break block alignment. Unicode escapes are defused in both shapes, and in
    block comments the closing sequence is escaped.

    Args:
        description: Text returned by the description service
        kind: Comment shape the text goes into

    Returns:
        Single-line text that cannot terminate the comment
    """
    text = collapse_line_breaks(description).strip()
    text = _defuse_unicode_escapes(text, kind)
    if kind is ClassificationKind.METHOD:
        text = text.replace(CommentDefaults.BLOCK_CLOSE_SEQUENCE, CommentDefaults.BLOCK_CLOSE_ESCAPED)
    return text


def _render_inline(description: str) -> str:
    if not description:
        return CommentDefaults.INLINE_MARKER + "\n"
    return f"{CommentDefaults.INLINE_MARKER} {description}\n"


def _render_block(classification: Classification, description: str, indent_column: int) -> str:
    continuation = CommentDefaults.BLOCK_CONTINUATION

    lines = [f"{CommentDefaults.BLOCK_OPEN} {CommentDefaults.BANNER}"]
    lines.append(f"{continuation} {description}" if description else continuation)
    lines.append(continuation)

    for name in classification.param_names:
        lines.append(f"{continuation} {CommentDefaults.PARAM_TAG} {name}")

    if not classification.is_void:
        lines.append(f"{continuation} {CommentDefaults.RETURN_TAG}")

    lines.append(CommentDefaults.BLOCK_CLOSE)

    # The first line starts at the insertion point, which already sits at the column
    indent = " " * indent_column
    return "\n".join([lines[0]] + [indent + line for line in lines[1:]]) + "\n"


def synthesize_comment(classification: Classification, description: str, indent_column: int = 0) -> SynthesizedComment:
    """Render the comment for a classified fragment.

    Args:
        classification: Method or Snippet classification
        description: Description text (sanitized here, never parsed)
        indent_column: Column of the selection start

    Returns:
        Newline-terminated comment aligned to indent_column

    Raises:
        ValueError: If indent_column is negative
    """
    if indent_column < 0:
        raise ValueError(f"indent_column must be >= 0, got {indent_column}")

    safe = sanitize_description(description, classification.kind)
    if classification.is_method:
        text = _render_block(classification, safe, indent_column)
    else:
        text = _render_inline(safe)

    return SynthesizedComment(text=text, kind=classification.kind, indent_column=indent_column)
