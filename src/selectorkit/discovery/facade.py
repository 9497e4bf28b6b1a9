"""
Public API for resolving batches of selectors.

Each selector resolves independently: a failure is recorded in its report and
never aborts the rest of the batch.
"""

from typing import Any, Iterable, List

from selectorkit.exceptions import AmbiguousSymbol, ResolutionError
from selectorkit.logging_config import logger
from selectorkit.resolution.space import MemberSymbol, qualified_class_name
from selectorkit.schemas import ResolutionReport
from .selectors import Selector


def describe_target(value: Any) -> str:
    """Human readable form of a resolved value."""
    if isinstance(value, MemberSymbol):
        return f"{qualified_class_name(value.declaring_class)}#{value.describe()}"
    if isinstance(value, type):
        return qualified_class_name(value)
    return str(value)


def resolve_selector(selector: Selector) -> ResolutionReport:
    """
    Resolve a single selector into a report.

    Args:
        selector: Selector to resolve

    Returns:
        ResolutionReport with either the target or the error details
    """
    try:
        value = selector.resolve()
    except AmbiguousSymbol as e:
        return ResolutionReport(
            selector=selector.to_text(),
            kind=selector.kind.value,
            resolved=False,
            error_type=type(e).__name__,
            error_message=str(e),
            candidates=[c.describe() for c in e.candidates],
        )
    except ResolutionError as e:
        return ResolutionReport(
            selector=selector.to_text(),
            kind=selector.kind.value,
            resolved=False,
            error_type=type(e).__name__,
            error_message=str(e),
        )

    return ResolutionReport(
        selector=selector.to_text(),
        kind=selector.kind.value,
        resolved=True,
        target=describe_target(value),
    )


def resolve_all(selectors: Iterable[Selector]) -> List[ResolutionReport]:
    """
    Resolve every selector, collecting per-selector failures.

    Args:
        selectors: Selectors from a discovery request

    Returns:
        One report per selector, in input order
    """
    reports = [resolve_selector(selector) for selector in selectors]
    failed = sum(1 for report in reports if not report.resolved)
    if failed:
        logger.info(f"Resolved {len(reports) - failed}/{len(reports)} selectors ({failed} failed)")
    else:
        logger.debug(f"Resolved {len(reports)} selectors")
    return reports
