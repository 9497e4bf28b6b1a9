"""
selectorkit - Test selector resolution engine

Resolves class, method, unique ID and location selectors lazily against the
running interpreter's classes.
"""

__version__ = "0.3.0"

from selectorkit.exceptions import (
    SelectorKitError,
    MalformedSelector,
    PreconditionViolation,
    ResolutionError,
    UnresolvableSymbol,
    ContainerLoadError,
    AmbiguousSymbol,
)
from selectorkit.parser import ParsedIdentifier, parse_identifier, parse_member_signature
from selectorkit.resolution import MemberSymbol, RuntimeSymbolSpace, SymbolLocator
from selectorkit.discovery import (
    SelectorFactory,
    SelectorKind,
    build,
    resolve_all,
    select_class,
    select_directory,
    select_file,
    select_method,
    select_names,
    select_package,
    select_resource,
    select_unique_id,
    select_uri,
)

__all__ = [
    "__version__",
    "SelectorKitError",
    "MalformedSelector",
    "PreconditionViolation",
    "ResolutionError",
    "UnresolvableSymbol",
    "ContainerLoadError",
    "AmbiguousSymbol",
    "ParsedIdentifier",
    "parse_identifier",
    "parse_member_signature",
    "MemberSymbol",
    "RuntimeSymbolSpace",
    "SymbolLocator",
    "SelectorFactory",
    "SelectorKind",
    "build",
    "resolve_all",
    "select_class",
    "select_directory",
    "select_file",
    "select_method",
    "select_names",
    "select_package",
    "select_resource",
    "select_unique_id",
    "select_uri",
]
