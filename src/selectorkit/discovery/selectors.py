"""
Selectors: immutable requests designating one test unit.

Selectors built by name resolve lazily on first access and memoize the
outcome, failures included. Selectors built from a direct reference hold the
resolved symbol from the start and never consult the locator.

Equality and hashing use only the structural fields supplied (or derived) at
construction, so a selector built from ``"pkg.mod.Case"`` equals one built
from the ``Case`` class itself.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Optional, Tuple
from urllib.parse import urlsplit

from selectorkit.parser.identifier import ParsedIdentifier
from selectorkit.resolution.locator import SymbolLocator, get_default_locator
from selectorkit.resolution.space import MemberSymbol
from .lazy import LazySlot
from .unique_id import UniqueId


class SelectorKind(str, Enum):
    UNIQUE_ID = "unique_id"
    PACKAGE = "package"
    CONTAINER = "class"
    MEMBER = "method"
    FILE = "file"
    DIRECTORY = "directory"
    URI = "uri"
    RESOURCE = "resource"


LOCATION_KINDS = frozenset({
    SelectorKind.FILE,
    SelectorKind.DIRECTORY,
    SelectorKind.URI,
    SelectorKind.RESOURCE,
})


@dataclass(frozen=True)
class Selector:
    """Base class of all selector kinds."""
    kind: ClassVar[SelectorKind]

    @property
    def is_location(self) -> bool:
        return self.kind in LOCATION_KINDS

    def resolve(self) -> Any:
        raise NotImplementedError

    def to_text(self) -> str:
        """Selector text for reports; never triggers resolution."""
        raise NotImplementedError


@dataclass(frozen=True)
class UniqueIdSelector(Selector):
    kind: ClassVar[SelectorKind] = SelectorKind.UNIQUE_ID

    unique_id: UniqueId

    def resolve(self) -> UniqueId:
        return self.unique_id

    def to_text(self) -> str:
        return str(self.unique_id)


@dataclass(frozen=True)
class PackageSelector(Selector):
    """A package or namespace; opaque to this layer."""
    kind: ClassVar[SelectorKind] = SelectorKind.PACKAGE

    package_name: str

    def resolve(self) -> str:
        return self.package_name

    def to_text(self) -> str:
        return self.package_name


@dataclass(frozen=True)
class ClassSelector(Selector):
    kind: ClassVar[SelectorKind] = SelectorKind.CONTAINER

    class_name: str
    _container: Optional[type] = field(default=None, compare=False, repr=False)
    _locator: Optional[SymbolLocator] = field(default=None, compare=False, repr=False)
    _slot: LazySlot = field(default_factory=LazySlot, compare=False, repr=False)

    @property
    def container(self) -> type:
        return self.resolve()

    def resolve(self) -> type:
        """
        The selected class, loaded on first access.

        Raises:
            UnresolvableSymbol: class absent (cached, re-raised on every call)
            ContainerLoadError: class name malformed or its module failed to import
        """
        if self._container is not None:
            return self._container
        locator = self._locator or get_default_locator()
        return self._slot.get(lambda: locator.locate_container(self.class_name))

    def to_text(self) -> str:
        return self.class_name


@dataclass(frozen=True)
class MethodSelector(Selector):
    kind: ClassVar[SelectorKind] = SelectorKind.MEMBER

    class_name: str
    method_name: str
    parameter_types: Optional[Tuple[str, ...]] = None
    _container: Optional[type] = field(default=None, compare=False, repr=False)
    _member: Optional[MemberSymbol] = field(default=None, compare=False, repr=False)
    _locator: Optional[SymbolLocator] = field(default=None, compare=False, repr=False)
    _container_slot: LazySlot = field(default_factory=LazySlot, compare=False, repr=False)
    _member_slot: LazySlot = field(default_factory=LazySlot, compare=False, repr=False)

    @property
    def container(self) -> type:
        """
        The class the method is selected in (the declaring class or a subclass).

        Raises:
            UnresolvableSymbol: if the class cannot be loaded
        """
        if self._container is not None:
            return self._container
        locator = self._locator or get_default_locator()
        return self._container_slot.get(lambda: locator.locate_container(self.class_name))

    @property
    def member(self) -> MemberSymbol:
        return self.resolve()

    def resolve(self) -> MemberSymbol:
        """
        The selected method, located on first access.

        Raises:
            UnresolvableSymbol: class or method absent
            AmbiguousSymbol: no parameter types given and the method is overloaded
        """
        if self._member is not None:
            return self._member
        locator = self._locator or get_default_locator()
        return self._member_slot.get(
            lambda: locator.locate_member(self.container, self.method_name, self.parameter_types)
        )

    @property
    def identifier(self) -> ParsedIdentifier:
        return ParsedIdentifier(self.class_name, self.method_name, self.parameter_types)

    @property
    def method_text(self) -> str:
        return self.identifier.member_text

    def to_text(self) -> str:
        return self.identifier.render()


@dataclass(frozen=True)
class FileSelector(Selector):
    kind: ClassVar[SelectorKind] = SelectorKind.FILE

    raw_path: str = field(compare=False)
    canonical_path: Path

    @property
    def path(self) -> Path:
        return Path(self.raw_path)

    def resolve(self) -> Path:
        return self.canonical_path

    def to_text(self) -> str:
        return self.raw_path


@dataclass(frozen=True)
class DirectorySelector(Selector):
    kind: ClassVar[SelectorKind] = SelectorKind.DIRECTORY

    raw_path: str = field(compare=False)
    canonical_path: Path

    @property
    def path(self) -> Path:
        return Path(self.raw_path)

    def resolve(self) -> Path:
        return self.canonical_path

    def to_text(self) -> str:
        return self.raw_path


@dataclass(frozen=True)
class UriSelector(Selector):
    kind: ClassVar[SelectorKind] = SelectorKind.URI

    uri: str

    @property
    def scheme(self) -> str:
        return urlsplit(self.uri).scheme

    def resolve(self) -> str:
        return self.uri

    def to_text(self) -> str:
        return self.uri


@dataclass(frozen=True)
class ResourceSelector(Selector):
    """A resource addressed relative to the import path (``sys.path``)."""
    kind: ClassVar[SelectorKind] = SelectorKind.RESOURCE

    resource_name: str

    def resolve(self) -> str:
        return self.resource_name

    def to_text(self) -> str:
        return self.resource_name
