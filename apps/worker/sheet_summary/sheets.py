from __future__ import annotations

import logging

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .config import Settings
from .errors import ReadError, ResizeError, TabCreationError, TabNotFoundError, WriteError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def build_service(credentials_file: str):
    creds = service_account.Credentials.from_service_account_file(
        credentials_file, scopes=SCOPES
    )
    return build("sheets", "v4", credentials=creds, cache_discovery=False)


def col_to_a1(column: int) -> str:
    """1-based column number to its A1 letters (1 -> A, 27 -> AA)."""
    if column < 1:
        raise ValueError(f"Column numbers start at 1, got {column}")
    letters = ""
    n = column
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = chr(65 + rem) + letters
    return letters


def quote_title(title: str) -> str:
    return "'" + title.replace("'", "''") + "'"


class SheetsClient:
    """Google Sheets access for a single spreadsheet.

    Every remote call the summary pipeline makes goes through this class, so a
    test can swap it for any object exposing the same methods.
    """

    def __init__(self, service, spreadsheet_id: str, num_retries: int = 3):
        self.service = service
        self.spreadsheet_id = spreadsheet_id
        self.num_retries = num_retries

    @classmethod
    def from_settings(cls, settings: Settings) -> "SheetsClient":
        return cls(
            build_service(settings.credentials_file),
            settings.spreadsheet_id,
            num_retries=settings.num_retries,
        )

    def _sheet_properties(self) -> list[dict]:
        sheet = self.service.spreadsheets().get(
            spreadsheetId=self.spreadsheet_id,
            fields="sheets(properties(title,sheetId,index,gridProperties(rowCount,columnCount)))",
        ).execute(num_retries=self.num_retries)
        return [s.get("properties", {}) for s in sheet.get("sheets", [])]

    def _batch_update(self, requests: list[dict]):
        return self.service.spreadsheets().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"requests": requests},
        ).execute(num_retries=self.num_retries)

    def list_existing_titles(self, tab_range: tuple[int | None, int | None] = (None, None)) -> list[str]:
        try:
            props = sorted(self._sheet_properties(), key=lambda p: p.get("index", 0))
        except HttpError as exc:
            raise ReadError(f"Unable to list tabs of project {self.spreadsheet_id}: {exc}") from exc
        titles = [p["title"] for p in props if "title" in p]
        start, end = tab_range
        return titles[start:end]

    def get_values(self, range_a1: str) -> list[list[str]]:
        try:
            result = self.service.spreadsheets().values().get(
                spreadsheetId=self.spreadsheet_id,
                range=range_a1,
            ).execute(num_retries=self.num_retries)
        except HttpError as exc:
            raise ReadError(f"Unable to read {range_a1}: {exc}") from exc
        return result.get("values", [])

    def resolve_tab_id(self, title: str) -> int:
        try:
            props_list = self._sheet_properties()
        except HttpError as exc:
            raise TabNotFoundError(title, f"could not be looked up: {exc}") from exc
        for props in props_list:
            if props.get("title") == title:
                return props["sheetId"]
        raise TabNotFoundError(title)

    def grid_size(self, tab_id: int) -> tuple[int, int]:
        for props in self._sheet_properties():
            if props.get("sheetId") == tab_id:
                grid = props.get("gridProperties") or {}
                return int(grid.get("columnCount") or 26), int(grid.get("rowCount") or 1000)
        raise TabNotFoundError(str(tab_id))

    def create_tab(self, title: str) -> int:
        try:
            response = self._batch_update([{"addSheet": {"properties": {"title": title}}}])
        except HttpError as exc:
            raise TabCreationError(f"Unable to create tab {title!r}: {exc}") from exc
        replies = response.get("replies") or [{}]
        return replies[0].get("addSheet", {}).get("properties", {}).get("sheetId")

    def resize_tab(self, tab_id: int, columns: int, rows: int):
        # appendDimension only grows, so a tab that is already large enough is left alone.
        try:
            current_cols, current_rows = self.grid_size(tab_id)
            requests = []
            if columns > current_cols:
                requests.append(
                    {"appendDimension": {"sheetId": tab_id, "dimension": "COLUMNS", "length": columns - current_cols}}
                )
            if rows > current_rows:
                requests.append(
                    {"appendDimension": {"sheetId": tab_id, "dimension": "ROWS", "length": rows - current_rows}}
                )
            if not requests:
                logger.debug("Tab %s already holds %sx%s, no resize needed", tab_id, columns, rows)
                return
            self._batch_update(requests)
        except HttpError as exc:
            raise ResizeError(f"Unable to resize tab {tab_id}: {exc}") from exc

    def write_values(self, data: list[dict]):
        # The whole header step is a single request.
        try:
            self.service.spreadsheets().values().batchUpdate(
                spreadsheetId=self.spreadsheet_id,
                body={"valueInputOption": "RAW", "data": data},
            ).execute(num_retries=self.num_retries)
        except HttpError as exc:
            raise WriteError(f"Error writing values to project {self.spreadsheet_id}: {exc}") from exc

    def write_cells(self, requests: list[dict]):
        try:
            self._batch_update(requests)
        except HttpError as exc:
            raise WriteError(f"Error writing cells to project {self.spreadsheet_id}: {exc}") from exc

    def apply_styling(self, requests: list[dict]):
        try:
            self._batch_update(requests)
        except HttpError as exc:
            raise WriteError(f"Error styling project {self.spreadsheet_id}: {exc}") from exc
