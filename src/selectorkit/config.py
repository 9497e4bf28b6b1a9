"""
Configuration for selector parsing, symbol location and unique IDs.
"""

# Selector text grammar
PARSER_CONFIG = {
    "member_separator": "#",       # Container/member separator (first occurrence wins)
    "module_separator": ":",       # Optional "pkg.mod:QualName" container form
    "open_paren": "(",
    "close_paren": ")",
    "parameter_separator": ",",
    "nesting_pairs": {"[": "]", "(": ")", "{": "}"},  # Commas inside these do not split parameters
}

# Symbol space lookup
LOCATOR_CONFIG = {
    "unannotated_type_name": "object",  # Rendered type for parameters without annotations
    "consult_overloads": True,          # Expand members into typing.overload variants
    "evaluate_annotations": True,       # Try typing.get_type_hints before raw annotations
}

# Unique ID format
UNIQUE_ID_CONFIG = {
    "default_engine_id": "selectorkit",
    "segment_separator": "/",
    "type_value_separator": ":",
    "segment_types": {
        "engine": "engine",
        "class": "class",
        "method": "method",
    },
    # Characters percent-encoded inside segment types and values
    "reserved_characters": "%[]:/",
}
