"""
================================================================================
Locators
================================================================================

Immutable element descriptors and the explicit lookup result type.

A ``Locator`` is a strategy + selector pair owned by a page object. A lookup
against the browser never raises for a missing element; it returns either
``Found(element)`` or ``ABSENT`` so callers branch on data.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class By(str, Enum):
    """Locator strategies understood by the driver adapter."""

    CSS = "css"
    XPATH = "xpath"
    ID = "id"
    TEXT = "text"
    TEST_ID = "test_id"


@dataclass(frozen=True)
class Locator:
    """
    Strategy + selector identifying zero or more elements.

    Attributes:
        strategy: How ``selector`` is interpreted
        selector: The selector string
        description: Human-readable name for logs and Allure steps
    """

    strategy: By
    selector: str
    description: str = ""

    @classmethod
    def css(cls, selector: str, description: str = "") -> "Locator":
        return cls(By.CSS, selector, description)

    @classmethod
    def xpath(cls, selector: str, description: str = "") -> "Locator":
        return cls(By.XPATH, selector, description)

    @classmethod
    def text(cls, selector: str, description: str = "") -> "Locator":
        return cls(By.TEXT, selector, description)

    @classmethod
    def test_id(cls, selector: str, description: str = "") -> "Locator":
        return cls(By.TEST_ID, selector, description)

    def __str__(self) -> str:
        if self.description:
            return f"{self.description} ({self.strategy.value}={self.selector})"
        return f"{self.strategy.value}={self.selector}"


@dataclass(frozen=True)
class Found:
    """Successful lookup holding the driver's element handle."""

    element: Any


class Absent:
    """Lookup that matched nothing."""

    _instance = None

    def __new__(cls) -> "Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent()

LookupResult = Union[Found, Absent]


__all__ = [
    "ABSENT",
    "Absent",
    "By",
    "Found",
    "Locator",
    "LookupResult",
]
