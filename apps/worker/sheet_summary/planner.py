from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .errors import PlanningError


@dataclass(frozen=True)
class DimensionPlan:
    columns: int
    rows: int


def plan_dimensions(
    prior_titles: Sequence[str],
    header_indicators: Sequence[str],
    body_payload: Iterable[dict],
) -> DimensionPlan:
    """Size the summary tab: one column per (prior tab, indicator), rows up to the deepest paste."""
    columns = len(prior_titles) * len(header_indicators)
    end_rows = []
    for position, entry in enumerate(body_payload):
        try:
            end_rows.append(int(entry["copyPaste"]["destination"]["endRowIndex"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise PlanningError(f"Body entry {position} has no destination endRowIndex") from exc
    if not end_rows:
        raise PlanningError("Cannot size the summary tab from an empty body payload")
    return DimensionPlan(columns=columns, rows=max(end_rows))
