"""
Runtime symbol space: load classes by qualified name and introspect members.

Containers are classes reachable through ``importlib``; members are
function-valued attributes found along the class MRO. Overloads are the
variants registered with ``typing.overload`` for one implementation.
"""

import importlib
import inspect
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple

from selectorkit.config import LOCATOR_CONFIG, PARSER_CONFIG
from selectorkit.logging_config import logger


class LoadStatus(str, Enum):
    FOUND = "found"
    ABSENT = "absent"
    BROKEN = "broken"


@dataclass(frozen=True)
class LoadOutcome:
    """Result of loading a container by name."""
    name: str
    status: LoadStatus
    container: Optional[type] = None
    reason: str = ""
    error: Optional[BaseException] = field(default=None, compare=False)

    @property
    def found(self) -> bool:
        return self.status is LoadStatus.FOUND


@dataclass(frozen=True)
class MemberSymbol:
    """
    Resolved handle to a method.

    Equality is identity of the underlying declaration: the same function
    object declared in the same class. Looking a method up through a subclass
    yields a symbol equal to looking it up on the declaring class.
    """
    name: str
    declaring_class: type
    function: Callable
    parameter_types: Optional[Tuple[str, ...]] = field(default=None, compare=False)

    def describe(self) -> str:
        if self.parameter_types is None:
            return f"{self.name}(?)"
        return f"{self.name}({', '.join(self.parameter_types)})"


def qualified_class_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def type_name(annotation: Any, unannotated: Optional[str] = None) -> str:
    """Render a parameter annotation as a type name."""
    if annotation is inspect.Parameter.empty:
        return unannotated or LOCATOR_CONFIG["unannotated_type_name"]
    if isinstance(annotation, str):
        return annotation.strip()
    if isinstance(annotation, type) and not typing.get_args(annotation):
        if annotation.__module__ == "builtins":
            return annotation.__qualname__
        return qualified_class_name(annotation)
    return repr(annotation)


def type_aliases(annotation: Any, unannotated: Optional[str] = None) -> Tuple[str, ...]:
    """All spellings a requested type name may use to match ``annotation``."""
    primary = type_name(annotation, unannotated)
    if isinstance(annotation, type) and not typing.get_args(annotation):
        return (primary, annotation.__qualname__, qualified_class_name(annotation))
    return (primary,)


@dataclass(frozen=True)
class _Variant:
    function: Callable
    bound: bool


def _unwrap(raw: Any) -> Optional[Tuple[Callable, bool]]:
    """Return (function, takes_self_or_cls) for a class attribute, or None."""
    if isinstance(raw, staticmethod):
        return raw.__func__, False
    if isinstance(raw, classmethod):
        return raw.__func__, True
    if inspect.isfunction(raw):
        return raw, True
    if inspect.isroutine(raw):
        # Builtin descriptors (slot wrappers, method descriptors) on builtin bases
        return raw, True
    return None


class RuntimeSymbolSpace:
    """
    Introspection facility backing the symbol locator.

    Holds no cache of its own; repeated lookups re-read the live classes.
    """

    def __init__(self, config: Optional[dict] = None):
        self.config = dict(LOCATOR_CONFIG)
        if config:
            self.config.update(config)

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def load_container(self, name: str) -> LoadOutcome:
        """
        Load a class by qualified name.

        Accepts ``pkg.mod.Outer.Inner`` (the longest importable module prefix
        wins) and ``pkg.mod:Outer.Inner``.
        """
        module_sep = PARSER_CONFIG["module_separator"]
        name = name.strip()

        if module_sep in name:
            module_name, _, attribute_path = name.partition(module_sep)
            split_points = [(module_name, attribute_path)]
            segments = module_name.split(".") + attribute_path.split(".")
        else:
            segments = name.split(".")
            split_points = [
                (".".join(segments[:i]), ".".join(segments[i:]))
                for i in range(len(segments) - 1, 0, -1)
            ]

        if any(not segment.isidentifier() for segment in segments):
            return LoadOutcome(name, LoadStatus.BROKEN, reason=f"'{name}' is not a valid qualified class name")
        if not split_points or not all(attribute for _, attribute in split_points):
            return LoadOutcome(name, LoadStatus.ABSENT, reason=f"'{name}' does not name a class inside a module")

        for module_name, attribute_path in split_points:
            try:
                module = importlib.import_module(module_name)
            except ModuleNotFoundError as e:
                if e.name and (module_name == e.name or module_name.startswith(e.name + ".")):
                    continue
                logger.warning(f"Module '{module_name}' failed to import: {e}")
                return LoadOutcome(name, LoadStatus.BROKEN, reason=f"Failed to import module '{module_name}': {e}", error=e)
            except Exception as e:
                logger.warning(f"Module '{module_name}' failed to import: {e}")
                return LoadOutcome(name, LoadStatus.BROKEN, reason=f"Failed to import module '{module_name}': {e}", error=e)

            target: Any = module
            for attribute in attribute_path.split("."):
                if not hasattr(target, attribute):
                    return LoadOutcome(name, LoadStatus.ABSENT, reason=f"'{attribute}' not found in '{module_name}'")
                target = getattr(target, attribute)

            if not inspect.isclass(target):
                return LoadOutcome(name, LoadStatus.ABSENT, reason=f"'{name}' is not a class")
            logger.debug(f"Loaded container {name} from module {module_name}")
            return LoadOutcome(name, LoadStatus.FOUND, container=target)

        return LoadOutcome(name, LoadStatus.ABSENT, reason=f"No module found for '{name}'")

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def list_members(self, container: type, name: str) -> List[MemberSymbol]:
        """Variants of the most-derived declaration of ``name``."""
        klass = self._declaring_class(container, name)
        if klass is None:
            return []
        return self._declared_variants(klass, name)

    @staticmethod
    def _declaring_class(container: type, name: str) -> Optional[type]:
        for klass in inspect.getmro(container):
            if name in vars(klass):
                return klass
        return None

    def find_member(
        self,
        container: type,
        name: str,
        parameter_types: Optional[Sequence[str]] = None,
    ) -> Optional[MemberSymbol]:
        """
        Find a member by name, or by name and exact parameter types.

        Only the most-derived declaration of ``name`` is considered, the one
        attribute lookup on an instance would reach. Without parameter types
        the first variant is returned.
        """
        if parameter_types is None:
            members = self.list_members(container, name)
            return members[0] if members else None

        klass = self._declaring_class(container, name)
        if klass is None:
            return None
        requested = tuple(t.strip() for t in parameter_types)
        for symbol, aliases in self._declared_variants(klass, name, with_aliases=True):
            if aliases is not None and self._signature_matches(requested, aliases):
                return symbol
        return None

    def member_for_function(self, container: type, function: Callable) -> Optional[MemberSymbol]:
        """Build the symbol for a function object reachable from ``container``."""
        function = getattr(function, "__func__", function)
        name = getattr(function, "__name__", None)
        if name is None:
            return None
        klass = self._declaring_class(container, name)
        if klass is None:
            return None
        for symbol in self._declared_variants(klass, name):
            if symbol.function is function:
                return symbol
        unwrapped = _unwrap(vars(klass)[name])
        if unwrapped is not None and unwrapped[0] is function:
            # Implementation behind typing.overload variants
            symbol, _ = self._symbol(klass, name, _Variant(*unwrapped))
            return symbol
        return None

    def _variants(self, raw: Any) -> List[_Variant]:
        unwrapped = _unwrap(raw)
        if unwrapped is None:
            return []
        function, bound = unwrapped
        if self.config["consult_overloads"] and inspect.isfunction(function):
            overloads = typing.get_overloads(function)
            if overloads:
                return [_Variant(overload, bound) for overload in overloads]
        return [_Variant(function, bound)]

    def _declared_variants(self, klass: type, name: str, with_aliases: bool = False):
        result = []
        for variant in self._variants(vars(klass)[name]):
            symbol, aliases = self._symbol(klass, name, variant)
            result.append((symbol, aliases) if with_aliases else symbol)
        return result

    def _symbol(self, klass: type, name: str, variant: _Variant):
        annotations = self._parameter_annotations(variant)
        if annotations is None:
            parameter_types = None
            aliases = None
        else:
            unannotated = self.config["unannotated_type_name"]
            parameter_types = tuple(prefix + type_name(a, unannotated) for prefix, a in annotations)
            aliases = [tuple(prefix + alias for alias in type_aliases(a, unannotated)) for prefix, a in annotations]
        symbol = MemberSymbol(
            name=name,
            declaring_class=klass,
            function=variant.function,
            parameter_types=parameter_types,
        )
        return symbol, aliases

    def _parameter_annotations(self, variant: _Variant):
        """Ordered (prefix, annotation) pairs, or None when not introspectable."""
        try:
            signature = inspect.signature(variant.function)
        except (TypeError, ValueError):
            return None

        hints = {}
        if self.config["evaluate_annotations"]:
            try:
                hints = typing.get_type_hints(variant.function)
            except Exception:
                # Unresolvable forward references fall back to the raw annotation
                hints = {}

        parameters = list(signature.parameters.values())
        if variant.bound and parameters and parameters[0].kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            parameters = parameters[1:]

        pairs = []
        for parameter in parameters:
            prefix = ""
            if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
                prefix = "*"
            elif parameter.kind is inspect.Parameter.VAR_KEYWORD:
                prefix = "**"
            pairs.append((prefix, hints.get(parameter.name, parameter.annotation)))
        return pairs

    @staticmethod
    def _signature_matches(requested: Tuple[str, ...], aliases) -> bool:
        if len(requested) != len(aliases):
            return False
        return all(name in options for name, options in zip(requested, aliases))
