"""
SymbolLocator: resolve structured names against the runtime symbol space.

Adds the error semantics on top of RuntimeSymbolSpace: absent symbols raise
UnresolvableSymbol, broken modules raise ContainerLoadError, and a name-only
lookup over overloads raises AmbiguousSymbol instead of picking one.
"""

from typing import Optional, Sequence

from selectorkit.exceptions import AmbiguousSymbol, ContainerLoadError, UnresolvableSymbol
from selectorkit.logging_config import logger
from .space import LoadOutcome, LoadStatus, MemberSymbol, RuntimeSymbolSpace, qualified_class_name


class SymbolLocator:
    """
    Locate containers and members by name.

    Stateless apart from the symbol space it wraps; results are never cached
    here (selectors memoize their own resolution).
    """

    def __init__(self, space: Optional[RuntimeSymbolSpace] = None):
        """
        Initialize the locator.

        Args:
            space: Symbol space to query. Defaults to a RuntimeSymbolSpace.
        """
        self.space = space or RuntimeSymbolSpace()

    def probe_container(self, name: str) -> LoadOutcome:
        """Load a container without raising; used for classification."""
        return self.space.load_container(name)

    def locate_container(self, name: str) -> type:
        """
        Locate a class by exact qualified name.

        Raises:
            ContainerLoadError: malformed name or module failed to import
            UnresolvableSymbol: no such class
        """
        outcome = self.probe_container(name)
        if outcome.found:
            return outcome.container
        if outcome.status is LoadStatus.BROKEN:
            raise ContainerLoadError(
                name,
                f"Could not load class with name: {name} ({outcome.reason})",
                cause=outcome.error,
            )
        logger.debug(f"Container {name} not found: {outcome.reason}")
        raise UnresolvableSymbol(name, f"Could not load class with name: {name}")

    def locate_member(
        self,
        container: type,
        member_name: str,
        parameter_types: Optional[Sequence[str]] = None,
    ) -> MemberSymbol:
        """
        Locate the most-derived declaration of a member of ``container``.

        Args:
            container: Resolved class
            member_name: Method name
            parameter_types: Exact ordered parameter type names, or None to
                match by name only

        Raises:
            UnresolvableSymbol: no matching member
            AmbiguousSymbol: name-only lookup found several overloads
        """
        container_name = qualified_class_name(container)

        if parameter_types is not None:
            symbol = self.space.find_member(container, member_name, parameter_types)
            if symbol is None:
                raise UnresolvableSymbol(
                    member_name,
                    f"Could not find method with name [{member_name}] and parameter types "
                    f"[{', '.join(parameter_types)}] in class [{container_name}].",
                )
            logger.debug(f"Located {container_name}#{symbol.describe()}")
            return symbol

        candidates = self.space.list_members(container, member_name)
        if not candidates:
            raise UnresolvableSymbol(
                member_name,
                f"Could not find method with name [{member_name}] in class [{container_name}].",
            )
        if len(candidates) > 1:
            logger.warning(f"Ambiguous lookup for {container_name}#{member_name}: {len(candidates)} overloads")
            raise AmbiguousSymbol(container_name, member_name, candidates)

        logger.debug(f"Located {container_name}#{candidates[0].describe()}")
        return candidates[0]

    def member_for_function(self, container: type, function) -> Optional[MemberSymbol]:
        """Symbol for a function object declared on ``container`` or its bases."""
        return self.space.member_for_function(container, function)


_default_locator: Optional[SymbolLocator] = None


def get_default_locator() -> SymbolLocator:
    """Shared stateless locator used when none is injected."""
    global _default_locator
    if _default_locator is None:
        _default_locator = SymbolLocator()
    return _default_locator
