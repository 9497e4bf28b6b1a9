"""
Parser package: selector text grammar.
"""

from .identifier import (
    ParsedIdentifier,
    parse_identifier,
    parse_member_signature,
    parse_parameter_types,
    format_parameter_types,
)

__all__ = [
    "ParsedIdentifier",
    "parse_identifier",
    "parse_member_signature",
    "parse_parameter_types",
    "format_parameter_types",
]
