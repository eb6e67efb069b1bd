"""
Typed keys for the Lending Registry.

Books and people are both keyed by plain text, which makes it easy to pass a
person id where a book id belongs. ``BookId`` and ``PersonId`` give the two key
spaces distinct names so the registry's mappings and method signatures say
which one they expect.
"""

from typing import NewType

BookId = NewType("BookId", str)
"""Canonical ISBN-like identifier of a book (e.g. ``"978-1"``)."""

PersonId = NewType("PersonId", str)
"""Identifier of a registered person (e.g. ``"p1"``)."""
