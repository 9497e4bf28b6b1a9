"""
Discovery package: selectors, their factory and batch resolution.
"""

from .facade import resolve_all, resolve_selector, describe_target
from .factory import (
    SelectorFactory,
    build,
    classify_name,
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
from .lazy import LazySlot
from .selectors import (
    LOCATION_KINDS,
    ClassSelector,
    DirectorySelector,
    FileSelector,
    MethodSelector,
    PackageSelector,
    ResourceSelector,
    Selector,
    SelectorKind,
    UniqueIdSelector,
    UriSelector,
)
from .unique_id import Segment, UniqueId, unique_id_for_class, unique_id_for_method

__all__ = [
    "resolve_all",
    "resolve_selector",
    "describe_target",
    "SelectorFactory",
    "build",
    "classify_name",
    "select_class",
    "select_directory",
    "select_file",
    "select_method",
    "select_names",
    "select_package",
    "select_resource",
    "select_unique_id",
    "select_uri",
    "LazySlot",
    "LOCATION_KINDS",
    "ClassSelector",
    "DirectorySelector",
    "FileSelector",
    "MethodSelector",
    "PackageSelector",
    "ResourceSelector",
    "Selector",
    "SelectorKind",
    "UniqueIdSelector",
    "UriSelector",
    "Segment",
    "UniqueId",
    "unique_id_for_class",
    "unique_id_for_method",
]
