"""Evaluator helper modules for the Monkey runtime."""

__all__ = [
    "blocks",
    "common",
    "expr",
    "fn",
    "helpers",
    "literals",
]
