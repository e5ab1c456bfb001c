from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .errors import PayloadError
from .sheets import col_to_a1, quote_title

logger = logging.getLogger(__name__)

# Row 0 holds the source tab title, row 1 the indicator names.
HEADER_ROWS = 2


def _check_destination(entry: dict, position: int):
    try:
        dest = entry["copyPaste"]["destination"]
        start = dest.get("startRowIndex", 0)
        end = dest["endRowIndex"]
    except (KeyError, TypeError, AttributeError) as exc:
        raise PayloadError(f"Body entry {position} has no copyPaste destination rows") from exc
    if not isinstance(start, int) or not isinstance(end, int):
        raise PayloadError(f"Body entry {position} has non-integer row indexes")
    if start < 0 or end <= start:
        raise PayloadError(
            f"Body entry {position} destination rows [{start}, {end}) are not a valid range"
        )


@dataclass(frozen=True)
class WritePayload:
    header_payload: tuple[dict, ...]
    body_payload: tuple[dict, ...]
    style_payload: tuple[dict, ...]
    grid_style_payload: tuple[dict, ...] = ()

    def __post_init__(self):
        for name in ("header_payload", "body_payload", "style_payload", "grid_style_payload"):
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))
        for position, entry in enumerate(self.body_payload):
            _check_destination(entry, position)


def _grid_range(sheet_id: int, start_row: int, end_row: int, start_col: int, end_col: int) -> dict:
    return {
        "sheetId": sheet_id,
        "startRowIndex": start_row,
        "endRowIndex": end_row,
        "startColumnIndex": start_col,
        "endColumnIndex": end_col,
    }


class PayloadBuilder:
    """Lays out last month's tabs side by side on the summary tab.

    Each prior tab gets a block of ``len(header_indicators)`` columns. Row 1
    carries the tab title (merged across the block), row 2 the indicator
    names, and the rows below are copy-pasted from the matching indicator
    column of the source tab.
    """

    def __init__(self, client, header_indicators: Sequence[str]):
        self.client = client
        self.header_indicators = list(header_indicators)

    def _source_layout(self, title: str) -> tuple[dict[str, int], int]:
        header = self.client.get_values(f"{quote_title(title)}!1:1")
        header_row = header[0] if header else []
        columns = {str(name).strip(): idx for idx, name in enumerate(header_row)}
        first_col = self.client.get_values(f"{quote_title(title)}!A:A")
        return columns, len(first_col)

    def build(
        self,
        prior_titles: Sequence[str],
        destination_title: str,
        destination_id: int | None = None,
    ) -> WritePayload:
        width = len(self.header_indicators)
        dest_id = destination_id
        if dest_id is None:
            dest_id = self.client.resolve_tab_id(destination_title)
        dest = quote_title(destination_title)

        header_payload: list[dict] = []
        body_payload: list[dict] = []
        style_payload: list[dict] = []
        grid_style_payload: list[dict] = []
        last_row = HEADER_ROWS

        for block, title in enumerate(prior_titles):
            first_col = block * width
            header_payload.append(
                {"range": f"{dest}!{col_to_a1(first_col + 1)}1", "values": [[title]]}
            )
            header_payload.append(
                {
                    "range": f"{dest}!{col_to_a1(first_col + 1)}2:{col_to_a1(first_col + width)}2",
                    "values": [list(self.header_indicators)],
                }
            )
            if width > 1:
                style_payload.append(
                    {
                        "mergeCells": {
                            "range": _grid_range(dest_id, 0, 1, first_col, first_col + width),
                            "mergeType": "MERGE_ALL",
                        }
                    }
                )

            source_id = self.client.resolve_tab_id(title)
            columns, row_count = self._source_layout(title)
            data_rows = row_count - 1
            if data_rows <= 0:
                logger.warning("Tab %s has no data rows, leaving its block empty", title)
                continue
            for offset, indicator in enumerate(self.header_indicators):
                src_col = columns.get(indicator)
                if src_col is None:
                    logger.warning("Tab %s has no %r column", title, indicator)
                    continue
                dest_col = first_col + offset
                body_payload.append(
                    {
                        "copyPaste": {
                            "source": _grid_range(source_id, 1, row_count, src_col, src_col + 1),
                            "destination": _grid_range(
                                dest_id, HEADER_ROWS, HEADER_ROWS + data_rows, dest_col, dest_col + 1
                            ),
                            "pasteType": "PASTE_NORMAL",
                        }
                    }
                )
            last_row = max(last_row, HEADER_ROWS + data_rows)

        total_cols = width * len(prior_titles)
        if total_cols:
            black = {"red": 0.0, "green": 0.0, "blue": 0.0}
            grey = {"red": 0.53, "green": 0.53, "blue": 0.53}
            grid_style_payload = [
                {
                    "repeatCell": {
                        "range": _grid_range(dest_id, 0, HEADER_ROWS, 0, total_cols),
                        "cell": {
                            "userEnteredFormat": {
                                "textFormat": {"bold": True, "foregroundColor": black},
                                "horizontalAlignment": "CENTER",
                            }
                        },
                        "fields": "userEnteredFormat(textFormat,horizontalAlignment)",
                    }
                },
                {
                    "updateBorders": {
                        "range": _grid_range(dest_id, 0, last_row, 0, total_cols),
                        "top": {"style": "SOLID_MEDIUM", "width": 2, "color": black},
                        "bottom": {"style": "SOLID_MEDIUM", "width": 2, "color": black},
                        "left": {"style": "SOLID_MEDIUM", "width": 2, "color": black},
                        "right": {"style": "SOLID_MEDIUM", "width": 2, "color": black},
                        "innerHorizontal": {"style": "SOLID", "width": 1, "color": grey},
                        "innerVertical": {"style": "SOLID", "width": 1, "color": grey},
                    }
                },
            ]

        return WritePayload(
            header_payload=tuple(header_payload),
            body_payload=tuple(body_payload),
            style_payload=tuple(style_payload),
            grid_style_payload=tuple(grid_style_payload),
        )
