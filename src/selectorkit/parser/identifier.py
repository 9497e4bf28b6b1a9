"""
Identifier Parser: turn raw selector text into a structured identifier.

Recognised forms:

    Container#Member(ParamList)
    Container#Member
    Container
    Member(ParamList)          (container known from context)

Names are never interpreted here. A container that is not a valid Python
dotted path, or a member name containing spaces or further ``#`` characters,
is kept verbatim and left for the symbol locator to accept or reject.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from selectorkit.config import PARSER_CONFIG
from selectorkit.exceptions import MalformedSelector

_SEPARATOR = PARSER_CONFIG["member_separator"]
_OPEN = PARSER_CONFIG["open_paren"]
_CLOSE = PARSER_CONFIG["close_paren"]

# Compiled once, never mutated: parsing stays re-entrant.
_MEMBER_WITH_PARAMETERS = re.compile(
    r"^([^" + re.escape(_OPEN + _CLOSE) + r"]*)"
    + re.escape(_OPEN)
    + r"([^" + re.escape(_OPEN + _CLOSE) + r"]*)"
    + re.escape(_CLOSE) + r"$",
    re.DOTALL,
)


@dataclass(frozen=True)
class ParsedIdentifier:
    """Structured form of a selector string."""
    container: Optional[str]
    member: Optional[str] = None
    parameter_types: Optional[Tuple[str, ...]] = None

    @property
    def has_member(self) -> bool:
        return self.member is not None

    @property
    def has_signature(self) -> bool:
        """True when a parameter list was given, including an empty one."""
        return self.parameter_types is not None

    @property
    def member_text(self) -> Optional[str]:
        """Member name with its parameter list, e.g. ``test4(str)``."""
        if self.member is None:
            return None
        if self.parameter_types is None:
            return self.member
        return f"{self.member}{_OPEN}{format_parameter_types(self.parameter_types)}{_CLOSE}"

    def render(self) -> str:
        """Rebuild canonical selector text from the structural fields."""
        if self.member is None:
            return self.container or ""
        if self.container is None:
            return self.member_text
        return f"{self.container}{_SEPARATOR}{self.member_text}"


def format_parameter_types(parameter_types) -> str:
    return ", ".join(parameter_types)


def _is_blank(text) -> bool:
    return text is None or not str(text).strip()


def parse_parameter_types(text: str, raw: Optional[str] = None) -> Tuple[str, ...]:
    """
    Split a parameter list on top-level commas.

    Commas nested in brackets (``dict[str, int]``) do not split. An empty or
    whitespace-only list yields a zero-arity signature ``()``.
    """
    raw = text if raw is None else raw
    if text is None:
        raise MalformedSelector(raw, "parameter list must not be None")
    if not text.strip():
        return ()

    pairs = PARSER_CONFIG["nesting_pairs"]
    closers = set(pairs.values())
    separator = PARSER_CONFIG["parameter_separator"]

    parts = []
    stack = []
    current = []
    for char in text:
        if char in pairs:
            stack.append(pairs[char])
        elif char in closers:
            if not stack or stack.pop() != char:
                raise MalformedSelector(raw, f"unbalanced {char!r} in parameter list")
        elif char == separator and not stack:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    if stack:
        raise MalformedSelector(raw, "unbalanced brackets in parameter list")
    parts.append("".join(current))

    names = tuple(part.strip() for part in parts)
    if any(not name for name in names):
        raise MalformedSelector(raw, "blank type name in parameter list")
    return names


def parse_member_signature(raw: str) -> ParsedIdentifier:
    """
    Parse the standalone ``Member`` or ``Member(ParamList)`` form.

    Used when the container is already known, e.g. a class reference plus a
    method name passed separately to the factory.
    """
    if _is_blank(raw):
        raise MalformedSelector(raw, "member name must not be null or blank")
    name, parameter_types = _split_member(raw, raw)
    return ParsedIdentifier(container=None, member=name, parameter_types=parameter_types)


def parse_identifier(raw: str) -> ParsedIdentifier:
    """
    Parse selector text according to the selector grammar.

    Raises:
        MalformedSelector: for null/blank input, an empty container or member,
            or parentheses that are unbalanced or not at the end of the member.
    """
    if _is_blank(raw):
        raise MalformedSelector(raw, "identifier must not be null or blank")

    container, sep, member = raw.partition(_SEPARATOR)
    if not sep:
        if _OPEN in raw or _CLOSE in raw:
            # Bare "member(params)" form
            return parse_member_signature(raw)
        return ParsedIdentifier(container=raw.strip())

    if not container.strip():
        raise MalformedSelector(raw, "container name before '#' must not be blank")
    if _OPEN in container or _CLOSE in container:
        raise MalformedSelector(raw, "parentheses are only allowed in the member part")
    if not member.strip():
        raise MalformedSelector(raw, "member name after '#' must not be blank")

    name, parameter_types = _split_member(member, raw)
    return ParsedIdentifier(
        container=container.strip(),
        member=name,
        parameter_types=parameter_types,
    )


def _split_member(member: str, raw: str):
    """
    Split a member part into its name and parameter types.

    Surrounding whitespace is stripped from the name in both forms; text
    inside the name is kept verbatim.
    """
    if _OPEN not in member and _CLOSE not in member:
        return member.strip(), None

    match = _MEMBER_WITH_PARAMETERS.match(member)
    if match is None:
        if member.count(_OPEN) != member.count(_CLOSE):
            raise MalformedSelector(raw, "unterminated parenthesis in member part")
        raise MalformedSelector(raw, "a single parameter list must end the member part")

    name, parameters = match.group(1), match.group(2)
    if not name.strip():
        raise MalformedSelector(raw, "member name before '(' must not be blank")
    return name.strip(), parse_parameter_types(parameters, raw)
