"""LxmlPageElement implementation wrapping CheckedHtmlElement.

This module provides the standard implementation of the PageElement protocol.
It wraps CheckedHtmlElement, delegates queries to it and wraps each result so
nested queries keep the page URL for error context.
"""

from __future__ import annotations

from lxml import etree, html

from hetman.common.checked_html import CheckedHtmlElement
from hetman.common.exceptions import StructureError


class LxmlPageElement:
    """Implementation of PageElement protocol wrapping CheckedHtmlElement.

    Attributes:
        _element: The underlying CheckedHtmlElement.
        _url: The URL the page was fetched from.
    """

    def __init__(self, element: CheckedHtmlElement, url: str = ""):
        """Initialize LxmlPageElement.

        Args:
            element: The CheckedHtmlElement to wrap.
            url: URL of the page, used in error messages.
        """
        self._element = element
        self._url = url

    @classmethod
    def from_html(cls, content: str | bytes, url: str = "") -> LxmlPageElement:
        """Parse markup into a page element rooted at the document.

        Args:
            content: Raw HTML markup.
            url: URL the markup was fetched from.

        Returns:
            LxmlPageElement for the document root.

        Raises:
            StructureError: If the content holds no markup to parse.
        """
        try:
            document = html.fromstring(content)
        except (etree.ParserError, etree.XMLSyntaxError) as e:
            raise StructureError(
                "Empty or unparseable page", url, {"error": str(e)}
            ) from e
        return cls(CheckedHtmlElement(document, url), url)

    @property
    def url(self) -> str:
        return self._url

    def query_xpath(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[LxmlPageElement]:
        """Query elements by XPath selector.

        Args:
            selector: XPath expression to execute.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Returns:
            List of matching LxmlPageElement instances.

        Raises:
            HTMLStructureError: If count doesn't match expectations.
        """
        checked_elements = self._element.checked_xpath(
            selector, description, min_count, max_count
        )
        return [LxmlPageElement(elem, self._url) for elem in checked_elements]

    def query_css(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[LxmlPageElement]:
        """Query elements by CSS selector.

        Args:
            selector: CSS selector expression.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Returns:
            List of matching LxmlPageElement instances.

        Raises:
            HTMLStructureError: If count doesn't match expectations.
        """
        checked_elements = self._element.checked_css(
            selector, description, min_count, max_count
        )
        return [LxmlPageElement(elem, self._url) for elem in checked_elements]

    def text_content(self) -> str:
        return self._element.text_content()

    def get_attribute(self, name: str) -> str | None:
        return self._element.get(name)

    def has_class(self, name: str) -> bool:
        # classList semantics: whitespace-separated tokens, exact match
        return name in (self.get_attribute("class") or "").split()

    def tag_name(self) -> str:
        return self._element.tag.lower()
