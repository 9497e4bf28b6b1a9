from pydantic import BaseModel, Field
from typing import List, Optional


class ResolutionReport(BaseModel):
    """
    Outcome of resolving one selector in a batch.
    """
    selector: str
    kind: str
    resolved: bool
    target: Optional[str] = None          # Description of the resolved symbol or location
    error_type: Optional[str] = None      # Exception class name when resolution failed
    error_message: Optional[str] = None
    candidates: List[str] = Field(default_factory=list)  # Overloads for ambiguous lookups


class ClassificationEntry(BaseModel):
    """
    How an ambiguous name was classified.
    """
    name: str
    kind: str
    selector: str
