"""Multi-format Markdown export engine."""
