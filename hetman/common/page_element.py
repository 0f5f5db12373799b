"""PageElement protocol for parser-agnostic data extraction.

The grid builder and clue extractor only need a small capability set from a
parsed page: count-checked selection by XPath or CSS, text extraction, and
attribute and class inspection. This protocol names that set so the
extraction code does not depend on a particular HTML library. The standard
implementation is LxmlPageElement.
"""

from __future__ import annotations

from typing import Protocol


class PageElement(Protocol):
    """Protocol for data extraction from a parsed HTML element.

    All query methods support count validation and raise HTMLStructureError
    if the actual count doesn't match expectations.
    """

    def query_xpath(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[PageElement]:
        """Query elements by XPath selector.

        Args:
            selector: XPath expression to execute.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Returns:
            List of matching PageElement instances.

        Raises:
            HTMLStructureError: If count doesn't match expectations.
        """
        ...

    def query_css(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[PageElement]:
        """Query elements by CSS selector.

        Args:
            selector: CSS selector expression.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Returns:
            List of matching PageElement instances.

        Raises:
            HTMLStructureError: If count doesn't match expectations.
        """
        ...

    def text_content(self) -> str:
        """Extract the text content of the element and its descendants."""
        ...

    def get_attribute(self, name: str) -> str | None:
        """Extract an attribute value, or None if it doesn't exist."""
        ...

    def has_class(self, name: str) -> bool:
        """Whether ``name`` appears in the element's class list."""
        ...

    def tag_name(self) -> str:
        """Get the element's tag name as a lowercase string."""
        ...
