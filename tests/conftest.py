"""Shared fixtures: an in-memory stand-in for SheetsClient."""

from datetime import date

import pytest

from sheet_summary.config import Settings
from sheet_summary.errors import TabNotFoundError
from sheet_summary.payload import WritePayload

WRITE_METHODS = ("write_values", "write_cells", "apply_styling")


class FakeSheetsClient:
    """Records every call; ``fail`` maps a method name to the exception it raises."""

    def __init__(self, titles=None, tab_ids=None, values=None, fail=None):
        self.titles = list(titles or [])
        self.tab_ids = dict(tab_ids or {})
        self.values = dict(values or {})
        self.fail = dict(fail or {})
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, args))
        exc = self.fail.get(name)
        if exc is not None:
            raise exc

    @property
    def call_names(self):
        return [name for name, _ in self.calls]

    @property
    def write_calls(self):
        return [name for name in self.call_names if name in WRITE_METHODS]

    def list_existing_titles(self, tab_range=(None, None)):
        self._record("list_existing_titles", tab_range)
        start, end = tab_range
        return self.titles[start:end]

    def create_tab(self, title):
        self._record("create_tab", title)
        new_id = 100 + len(self.tab_ids)
        self.tab_ids[title] = new_id
        self.titles.append(title)
        return new_id

    def resolve_tab_id(self, title):
        self._record("resolve_tab_id", title)
        if title not in self.tab_ids:
            raise TabNotFoundError(title)
        return self.tab_ids[title]

    def resize_tab(self, tab_id, columns, rows):
        self._record("resize_tab", tab_id, columns, rows)

    def get_values(self, range_a1):
        self._record("get_values", range_a1)
        return self.values.get(range_a1, [])

    def write_values(self, data):
        self._record("write_values", data)

    def write_cells(self, requests):
        self._record("write_cells", requests)

    def apply_styling(self, requests):
        self._record("apply_styling", requests)


class StaticPayloadBuilder:
    def __init__(self, payload):
        self.payload = payload
        self.calls = []
        self.destination_ids = []

    def build(self, prior_titles, destination_title, destination_id=None):
        self.calls.append((list(prior_titles), destination_title))
        self.destination_ids.append(destination_id)
        return self.payload


def copy_paste(end_row, start_row=2, column=0, sheet_id=7):
    return {
        "copyPaste": {
            "source": {"sheetId": 1, "startRowIndex": 1, "endRowIndex": end_row - start_row + 1},
            "destination": {
                "sheetId": sheet_id,
                "startRowIndex": start_row,
                "endRowIndex": end_row,
                "startColumnIndex": column,
                "endColumnIndex": column + 1,
            },
            "pasteType": "PASTE_NORMAL",
        }
    }


@pytest.fixture
def today():
    return date(2026, 2, 10)


@pytest.fixture
def settings():
    return Settings(spreadsheet_id="sheet-123", header_indicators=("Hours", "Cost"))


@pytest.fixture
def payload():
    return WritePayload(
        header_payload=({"range": "'Jan Summary'!A1", "values": [["Jan-1"]]},),
        body_payload=(copy_paste(5), copy_paste(12, column=1), copy_paste(8, column=2)),
        style_payload=({"mergeCells": {"range": {"sheetId": 7}, "mergeType": "MERGE_ALL"}},),
        grid_style_payload=({"updateBorders": {"range": {"sheetId": 7}}},),
    )


@pytest.fixture
def fake_client():
    return FakeSheetsClient(
        titles=["Config", "Dec-4", "Jan-2", "Jan-1", "Feb-1"],
        tab_ids={"Config": 1, "Dec-4": 2, "Jan-1": 3, "Jan-2": 4, "Feb-1": 5},
    )
