"""
Base markup format interface and registry.

A format turns markup text into a NodeList and back. The engine itself only
ever sees node trees; formats are the boundary with text.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..dom import Node


class MarkupFormat(ABC):
    """Base class for markup tokenizer/serializer pairs."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Format name (used by --type)."""
        ...

    @property
    @abstractmethod
    def extensions(self) -> list[str]:
        """File extensions this format handles (e.g., ['.html', '.htm'])."""
        ...

    def detect(self, content: str) -> bool:
        """
        Magic detection: returns True if content looks like this format.
        Default implementation returns False (rely on extension only).
        """
        return False

    @abstractmethod
    def parse(self, content: str) -> list[Node]:
        """Tokenize markup into a NodeList."""
        ...

    @abstractmethod
    def serialize(self, nodes: list[Node]) -> str:
        """Turn a NodeList back into markup text."""
        ...


class FormatRegistry:
    """Registry of markup formats with detection and selection."""

    def __init__(self):
        self._formats: list[MarkupFormat] = []
        self._by_extension: dict[str, MarkupFormat] = {}
        self._by_name: dict[str, MarkupFormat] = {}

    def register(self, fmt: MarkupFormat) -> None:
        """Register a format."""
        self._formats.append(fmt)
        self._by_name[fmt.name] = fmt
        for ext in fmt.extensions:
            # First registered wins for extension conflicts
            if ext not in self._by_extension:
                self._by_extension[ext] = fmt

    def get_by_name(self, name: str) -> MarkupFormat | None:
        """Get format by name (for --type override)."""
        return self._by_name.get(name)

    def get_by_extension(self, ext: str) -> MarkupFormat | None:
        """Get format by file extension."""
        if not ext.startswith('.'):
            ext = '.' + ext
        return self._by_extension.get(ext.lower())

    def detect(self, content: str, filename: str | None = None) -> MarkupFormat | None:
        """
        Detect the best format for content.

        Priority:
        1. Extension match
        2. Magic detection
        """
        if filename:
            ext = self._get_extension(filename)
            if ext and ext in self._by_extension:
                return self._by_extension[ext]

        for fmt in self._formats:
            if fmt.detect(content):
                return fmt

        # Return None to let caller decide fallback
        return None

    def _get_extension(self, filename: str) -> str | None:
        """Extract lowercase extension from filename."""
        if '.' in filename:
            return '.' + filename.rsplit('.', 1)[-1].lower()
        return None


# Global registry instance
registry = FormatRegistry()
