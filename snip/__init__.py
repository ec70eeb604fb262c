"""snip: a local JSON-backed store for code snippets, categories and tags."""

__version__ = "0.3.0"
