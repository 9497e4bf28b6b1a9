"""
Unique IDs: path-like identifiers addressing one node of a test hierarchy.

Format: ``[engine:selectorkit]/[class:pkg.mod.Case]/[method:test4()]``.
Reserved characters inside a segment are percent-encoded.
"""

from dataclasses import dataclass
from typing import Tuple, Union
from urllib.parse import quote, unquote

from selectorkit.config import UNIQUE_ID_CONFIG
from selectorkit.exceptions import MalformedSelector, PreconditionViolation

_SEGMENT_SEP = UNIQUE_ID_CONFIG["segment_separator"]
_TYPE_SEP = UNIQUE_ID_CONFIG["type_value_separator"]
_RESERVED = UNIQUE_ID_CONFIG["reserved_characters"]
_TYPES = UNIQUE_ID_CONFIG["segment_types"]


def _encode(text: str) -> str:
    # Only reserved characters are escaped; everything else stays readable
    return "".join(quote(c, safe="") if c in _RESERVED else c for c in text)


@dataclass(frozen=True)
class Segment:
    type: str
    value: str

    def __str__(self) -> str:
        return f"[{_encode(self.type)}{_TYPE_SEP}{_encode(self.value)}]"


@dataclass(frozen=True)
class UniqueId:
    segments: Tuple[Segment, ...]

    @classmethod
    def for_engine(cls, engine_id: str) -> "UniqueId":
        if not engine_id or not engine_id.strip():
            raise PreconditionViolation("engine ID must not be null or blank")
        return cls((Segment(_TYPES["engine"], engine_id),))

    @classmethod
    def parse(cls, text: str) -> "UniqueId":
        if text is None or not text.strip():
            raise MalformedSelector(text, "unique ID must not be null or blank")

        segments = []
        for part in text.strip().split(_SEGMENT_SEP):
            if len(part) < 2 or part[0] != "[" or part[-1] != "]":
                raise MalformedSelector(text, f"segment {part!r} is not of the form [type:value]")
            segment_type, sep, value = part[1:-1].partition(_TYPE_SEP)
            if not sep or not segment_type:
                raise MalformedSelector(text, f"segment {part!r} is missing its type")
            segments.append(Segment(unquote(segment_type), unquote(value)))
        return cls(tuple(segments))

    def append(self, segment_type: str, value: str) -> "UniqueId":
        return UniqueId(self.segments + (Segment(segment_type, value),))

    @property
    def engine_id(self):
        first = self.segments[0] if self.segments else None
        if first is not None and first.type == _TYPES["engine"]:
            return first.value
        return None

    @property
    def last_segment(self) -> Segment:
        return self.segments[-1]

    def __str__(self) -> str:
        return _SEGMENT_SEP.join(str(segment) for segment in self.segments)


def _class_name(cls_or_name: Union[type, str]) -> str:
    if isinstance(cls_or_name, type):
        return f"{cls_or_name.__module__}.{cls_or_name.__qualname__}"
    return cls_or_name


def unique_id_for_class(cls_or_name: Union[type, str], engine_id: str = None) -> UniqueId:
    engine_id = engine_id or UNIQUE_ID_CONFIG["default_engine_id"]
    return UniqueId.for_engine(engine_id).append(_TYPES["class"], _class_name(cls_or_name))


def unique_id_for_method(cls_or_name: Union[type, str], method_signature: str, engine_id: str = None) -> UniqueId:
    """Unique ID for a method, e.g. ``unique_id_for_method(Case, "test4(str)")``."""
    return unique_id_for_class(cls_or_name, engine_id).append(_TYPES["method"], method_signature)
