"""Feature modules for code-summarizer."""
