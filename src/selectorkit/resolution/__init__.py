"""
Resolution package: runtime symbol space and symbol locator.
"""

from .space import (
    LoadOutcome,
    LoadStatus,
    MemberSymbol,
    RuntimeSymbolSpace,
    qualified_class_name,
    type_name,
)
from .locator import SymbolLocator, get_default_locator

__all__ = [
    "LoadOutcome",
    "LoadStatus",
    "MemberSymbol",
    "RuntimeSymbolSpace",
    "SymbolLocator",
    "get_default_locator",
    "qualified_class_name",
    "type_name",
]
