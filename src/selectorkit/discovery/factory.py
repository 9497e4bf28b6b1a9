"""
Selector Factory: the public entry point for building selectors.

Named selectors are validated only syntactically and resolve lazily.
Location selectors are validated eagerly because they are meaningless without
an existing backing resource.
"""

import inspect
import warnings
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Set, Tuple, Union
from urllib.parse import urlsplit

from selectorkit.config import PARSER_CONFIG
from selectorkit.exceptions import MalformedSelector, PreconditionViolation
from selectorkit.logging_config import logger
from selectorkit.parser.identifier import (
    ParsedIdentifier,
    parse_identifier,
    parse_member_signature,
    parse_parameter_types,
)
from selectorkit.resolution.locator import SymbolLocator, get_default_locator
from selectorkit.resolution.space import LoadStatus, qualified_class_name
from .selectors import (
    ClassSelector,
    DirectorySelector,
    FileSelector,
    MethodSelector,
    PackageSelector,
    ResourceSelector,
    Selector,
    UniqueIdSelector,
    UriSelector,
)
from .unique_id import UniqueId

PathLike = Union[str, Path]
ParameterTypes = Union[str, Sequence[str], None]


def _require_text(value, what: str) -> str:
    if value is None:
        raise PreconditionViolation(f"{what} must not be null")
    if not isinstance(value, str):
        raise PreconditionViolation(f"{what} must be a string, got {type(value).__name__}")
    if not value.strip():
        raise PreconditionViolation(f"{what} must not be blank")
    return value


def _require_class(value, what: str = "class") -> type:
    if value is None:
        raise PreconditionViolation(f"{what} must not be null")
    if not inspect.isclass(value):
        raise PreconditionViolation(f"{what} must be a class, got {type(value).__name__}")
    return value


class SelectorFactory:
    """
    Builds selectors bound to a symbol locator.

    The locator is only used lazily by the selectors it builds, except for
    the deprecated select_names() classification which probes containers.
    """

    def __init__(self, locator: Optional[SymbolLocator] = None):
        self._locator = locator

    @property
    def locator(self) -> SymbolLocator:
        return self._locator or get_default_locator()

    # ------------------------------------------------------------------
    # Named selectors
    # ------------------------------------------------------------------

    def select_package(self, package_name: str) -> PackageSelector:
        return PackageSelector(_require_text(package_name, "package name").strip())

    def select_unique_id(self, unique_id: Union[str, UniqueId]) -> UniqueIdSelector:
        if isinstance(unique_id, UniqueId):
            return UniqueIdSelector(unique_id)
        return UniqueIdSelector(UniqueId.parse(_require_text(unique_id, "unique ID")))

    def select_class(self, class_or_name: Union[type, str]) -> ClassSelector:
        """Select a class by qualified name or by the class object."""
        if isinstance(class_or_name, str) or class_or_name is None:
            name = _require_text(class_or_name, "class name").strip()
            return ClassSelector(name, _locator=self._locator)
        cls = _require_class(class_or_name)
        return ClassSelector(qualified_class_name(cls), _container=cls, _locator=self._locator)

    def select_method(
        self,
        target: Union[type, str],
        method: Union[str, Callable, None] = None,
        parameter_types: ParameterTypes = None,
    ) -> MethodSelector:
        """
        Select a method.

        Forms:
            select_method("pkg.mod.Case#test4(str)")
            select_method("pkg.mod.Case", "test4", "str")
            select_method(Case, "test4(str)")
            select_method(Case, Case.test4)
        """
        if method is None:
            if parameter_types is not None:
                raise PreconditionViolation("parameter types require a method name")
            text = _require_text(target, "fully qualified method name")
            parsed = parse_identifier(text)
            if parsed.container is None or parsed.member is None:
                raise PreconditionViolation(
                    f"'{text}' is not a fully qualified method name of the form Class#method(params)"
                )
            return MethodSelector(
                parsed.container, parsed.member, parsed.parameter_types, _locator=self._locator
            )

        if isinstance(target, str) or target is None:
            class_name = _require_text(target, "class name").strip()
            name, types = self._member_name_and_types(method, parameter_types)
            return MethodSelector(class_name, name, types, _locator=self._locator)

        cls = _require_class(target)
        if isinstance(method, str):
            name, types = self._member_name_and_types(method, parameter_types)
            return MethodSelector(
                qualified_class_name(cls), name, types, _container=cls, _locator=self._locator
            )
        if parameter_types is not None:
            raise PreconditionViolation("parameter types cannot be combined with a method reference")
        return self._select_method_by_reference(cls, method)

    def _member_name_and_types(self, method, parameter_types: ParameterTypes) -> Tuple[str, Optional[Tuple[str, ...]]]:
        text = _require_text(method, "method name")
        parsed = parse_member_signature(text)
        if parameter_types is None:
            return parsed.member, parsed.parameter_types
        if parsed.has_signature:
            raise PreconditionViolation(
                f"parameter types given twice for method '{text}'"
            )
        if isinstance(parameter_types, str):
            return parsed.member, parse_parameter_types(parameter_types)
        return parsed.member, tuple(_require_text(t, "parameter type").strip() for t in parameter_types)

    def _select_method_by_reference(self, cls: type, function: Callable) -> MethodSelector:
        if not callable(function) and not isinstance(function, (staticmethod, classmethod)):
            raise PreconditionViolation(f"method must be a function, got {type(function).__name__}")
        symbol = self.locator.member_for_function(cls, function)
        if symbol is None:
            raise PreconditionViolation(
                f"{getattr(function, '__qualname__', function)!r} is not a method of class "
                f"[{qualified_class_name(cls)}]"
            )
        return MethodSelector(
            qualified_class_name(cls),
            symbol.name,
            symbol.parameter_types,
            _container=cls,
            _member=symbol,
            _locator=self._locator,
        )

    # ------------------------------------------------------------------
    # Location selectors (eagerly validated)
    # ------------------------------------------------------------------

    def select_file(self, file: PathLike) -> FileSelector:
        raw, canonical = self._existing_path(file, "file")
        if not canonical.is_file():
            raise PreconditionViolation(f"'{raw}' is not a file")
        return FileSelector(raw, canonical)

    def select_directory(self, directory: PathLike) -> DirectorySelector:
        raw, canonical = self._existing_path(directory, "directory")
        if not canonical.is_dir():
            raise PreconditionViolation(f"'{raw}' is not a directory")
        return DirectorySelector(raw, canonical)

    @staticmethod
    def _existing_path(value: PathLike, what: str) -> Tuple[str, Path]:
        """
        Validate a path argument.

        A string keeps its raw spelling; a Path object is canonicalised so its
        raw spelling is the canonical path.
        """
        if isinstance(value, Path):
            if not value.exists():
                raise PreconditionViolation(f"{what} '{value}' must exist")
            canonical = value.resolve()
            return str(canonical), canonical
        raw = _require_text(value, f"{what} path")
        path = Path(raw)
        if not path.exists():
            raise PreconditionViolation(f"{what} '{raw}' must exist")
        return raw, path.resolve()

    def select_uri(self, uri: str) -> UriSelector:
        text = _require_text(uri, "URI").strip()
        if any(c.isspace() for c in text):
            raise PreconditionViolation(f"Failed to create URI from '{text}': contains whitespace")
        try:
            parts = urlsplit(text)
        except ValueError as e:
            raise PreconditionViolation(f"Failed to create URI from '{text}': {e}") from e
        if not parts.scheme:
            raise PreconditionViolation(f"Failed to create URI from '{text}': missing scheme")
        if not (parts.netloc or parts.path or parts.query or parts.fragment):
            raise PreconditionViolation(f"Failed to create URI from '{text}': nothing after scheme")
        return UriSelector(text)

    def select_resource(self, resource_name: str) -> ResourceSelector:
        text = _require_text(resource_name, "resource name").strip()
        # Resources are always relative to an import path root
        name = text.lstrip("/")
        if not name:
            raise PreconditionViolation(f"resource name '{text}' must not be blank")
        return ResourceSelector(name)

    # ------------------------------------------------------------------
    # Generic entry points
    # ------------------------------------------------------------------

    def build(
        self,
        text: Optional[str] = None,
        *,
        unique_id: Optional[str] = None,
        package: Optional[str] = None,
        file: Optional[PathLike] = None,
        directory: Optional[PathLike] = None,
        uri: Optional[str] = None,
        resource: Optional[str] = None,
    ) -> Selector:
        """
        Build one selector from selector text or exactly one keyword argument.

        Text starting with ``[`` is a unique ID, text with a member part is a
        method selector, anything else a class selector.
        """
        given = {
            name: value
            for name, value in (
                ("unique_id", unique_id),
                ("package", package),
                ("file", file),
                ("directory", directory),
                ("uri", uri),
                ("resource", resource),
            )
            if value is not None
        }
        if text is not None:
            given["text"] = text
        if len(given) != 1:
            raise PreconditionViolation(
                f"exactly one selector argument is required, got {sorted(given) or 'none'}"
            )

        (kind, value), = given.items()
        builders = {
            "unique_id": self.select_unique_id,
            "package": self.select_package,
            "file": self.select_file,
            "directory": self.select_directory,
            "uri": self.select_uri,
            "resource": self.select_resource,
            "text": self._build_from_text,
        }
        return builders[kind](value)

    def _build_from_text(self, text: str) -> Selector:
        text = _require_text(text, "selector").strip()
        if text.startswith("["):
            return self.select_unique_id(text)
        parsed = parse_identifier(text)
        if parsed.has_member:
            return self._method_from_parsed(parsed, text)
        return ClassSelector(parsed.container, _locator=self._locator)

    def _method_from_parsed(self, parsed: ParsedIdentifier, text: str) -> MethodSelector:
        if parsed.container is not None:
            return MethodSelector(parsed.container, parsed.member, parsed.parameter_types, _locator=self._locator)
        # Legacy "pkg.mod.Case.method(params)" without a separator
        class_name, dot, method_name = parsed.member.rpartition(".")
        if not dot or not class_name or not method_name:
            raise MalformedSelector(text, "method reference has no class part")
        return MethodSelector(class_name, method_name, parsed.parameter_types, _locator=self._locator)

    # ------------------------------------------------------------------
    # Deprecated ambiguous names
    # ------------------------------------------------------------------

    def classify_name(self, name: str) -> Selector:
        """
        Classify one free-text name, first matching rule wins.

        1. member reference (``#`` or a parameter list)  -> MethodSelector
        2. loadable class (or a class whose module fails) -> ClassSelector
        3. anything else                                  -> PackageSelector
        """
        text = _require_text(name, "name").strip()
        for rule in _NAME_RULES:
            selector = rule(self, text)
            if selector is not None:
                logger.debug(f"Classified '{text}' as {selector.kind.value}")
                return selector
        raise AssertionError(f"no classification rule matched '{text}'")

    def select_names(self, names: Iterable[str]) -> Set[Selector]:
        """
        Build selectors from ambiguous names.

        Deprecated: use the explicit select_* functions instead.
        """
        warnings.warn(
            "select_names() is deprecated; use select_class(), select_method() or select_package()",
            DeprecationWarning,
            stacklevel=2,
        )
        if names is None:
            raise PreconditionViolation("names must not be null")
        return {self.classify_name(name) for name in names}


def _member_reference_rule(factory: SelectorFactory, text: str) -> Optional[Selector]:
    markers = (PARSER_CONFIG["member_separator"], PARSER_CONFIG["open_paren"], PARSER_CONFIG["close_paren"])
    if any(marker in text for marker in markers):
        return factory._method_from_parsed(parse_identifier(text), text)
    return None


def _container_rule(factory: SelectorFactory, text: str) -> Optional[Selector]:
    outcome = factory.locator.probe_container(text)
    if outcome.found:
        return ClassSelector(
            qualified_class_name(outcome.container), _container=outcome.container, _locator=factory._locator
        )
    if outcome.status is LoadStatus.BROKEN and outcome.error is not None:
        # Module exists but fails to import: the error surfaces on resolve()
        return ClassSelector(text, _locator=factory._locator)
    return None


def _package_rule(factory: SelectorFactory, text: str) -> Optional[Selector]:
    return PackageSelector(text)


_NAME_RULES: List[Callable[[SelectorFactory, str], Optional[Selector]]] = [
    _member_reference_rule,
    _container_rule,
    _package_rule,
]


_default_factory = SelectorFactory()

select_package = _default_factory.select_package
select_unique_id = _default_factory.select_unique_id
select_class = _default_factory.select_class
select_method = _default_factory.select_method
select_file = _default_factory.select_file
select_directory = _default_factory.select_directory
select_uri = _default_factory.select_uri
select_resource = _default_factory.select_resource
build = _default_factory.build
classify_name = _default_factory.classify_name
select_names = _default_factory.select_names
