"""Validators for extracted article metadata."""

from .author import validate_author, split_author_names

__all__ = ["validate_author", "split_author_names"]
