"""Period helpers: which tabs belong to last month, and what the summary is called.

Period tabs are titled ``<Mon>-<n>`` (``Jan-1``, ``Jan-2``...), one per
sub-period of the month. The month may also be spelled out (``January-3``)
and a space may replace the dash.
"""
from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timezone
from typing import Iterable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.relativedelta import relativedelta

from .config import DEFAULT_TITLE_TEMPLATE

_PERIOD_TAB_RE = re.compile(r"^\s*(?P<month>[A-Za-z]{3,9})[-\s](?P<part>\d+)\s*$")

_MONTHS = {}
for _num in range(1, 13):
    _MONTHS[calendar.month_abbr[_num].lower()] = _num
    _MONTHS[calendar.month_name[_num].lower()] = _num


def today_in(tz_name: str) -> date:
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        tz = timezone.utc
    return datetime.now(tz).date()


def prior_period(today: date) -> date:
    return today.replace(day=1) - relativedelta(months=1)


def parse_period_tab(title: str) -> tuple[int, int] | None:
    m = _PERIOD_TAB_RE.match(title or "")
    if not m:
        return None
    month = _MONTHS.get(m.group("month").lower())
    if month is None:
        return None
    return month, int(m.group("part"))


def select_prior_period_titles(
    existing_titles: Iterable[str],
    today: date,
    ignore: Iterable[str] = (),
) -> list[str]:
    """Return last month's period tabs, ordered by their sub-period number."""
    ignored = set(ignore)
    target_month = prior_period(today).month
    matches = []
    for title in existing_titles:
        if title in ignored:
            continue
        parsed = parse_period_tab(title)
        if parsed and parsed[0] == target_month:
            matches.append((parsed[1], title))
    return [title for _, title in sorted(matches)]


def new_destination_title(today: date, template: str = DEFAULT_TITLE_TEMPLATE) -> str:
    period = prior_period(today)
    return template.format(
        month=calendar.month_abbr[period.month],
        month_name=calendar.month_name[period.month],
        year=period.year,
    )
