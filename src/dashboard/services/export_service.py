"""Export Service

CSV / JSON export of the rows a table currently shows (sorted and filtered,
either every page or only the visible one).

Sources participating in export implement one (or both) of:
 - get_export_rows(page_only=...): (headers, rows) of display text
 - get_export_payload(page_only=...): list of dicts keyed by column key

``DataTableViewModel`` implements both; views delegate to their view model.
"""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass
from io import StringIO
from typing import Any, Protocol, Sequence, runtime_checkable

__all__ = [
    "ExportFormat",
    "ExportResult",
    "ExportService",
]


class ExportFormat:
    CSV = "csv"
    JSON = "json"


@dataclass
class ExportResult:
    format: str
    content: str
    suggested_extension: str
    row_count: int


@runtime_checkable
class TabularExportable(Protocol):  # pragma: no cover - structural
    def get_export_rows(
        self, *, page_only: bool = False
    ) -> tuple[Sequence[str], Sequence[Sequence[str]]]: ...


@runtime_checkable
class JsonExportable(Protocol):  # pragma: no cover - structural
    def get_export_payload(self, *, page_only: bool = False) -> Any: ...


class ExportService:
    """Facade for converting table data to serialized text.

    Usage:
        result = ExportService().export(viewmodel, ExportFormat.CSV)
        path.write_text(result.content, encoding='utf-8')
    """

    def export(
        self,
        source: Any,
        fmt: str,
        *,
        page_only: bool = False,
        included_columns: Sequence[str] | None = None,
    ) -> ExportResult:
        """Export a table source.

        Parameters
        ----------
        source: Any
            Object implementing TabularExportable and/or JsonExportable.
        fmt: str
            ExportFormat.CSV or ExportFormat.JSON
        page_only: bool
            Export only the visible page instead of every filtered row.
        included_columns: Sequence[str] | None
            Optional subset of header labels (CSV) or column keys (JSON) to keep.
        """
        if fmt == ExportFormat.CSV:
            return self._export_csv(source, page_only, included_columns)
        if fmt == ExportFormat.JSON:
            return self._export_json(source, page_only, included_columns)
        raise ValueError(f"Unsupported export format: {fmt}")

    def _export_csv(
        self, source: Any, page_only: bool, included_columns: Sequence[str] | None
    ) -> ExportResult:
        if not isinstance(source, TabularExportable):
            raise TypeError("Source does not provide tabular export interface")
        headers, rows = source.get_export_rows(page_only=page_only)
        headers = list(headers)
        if included_columns:
            idxs = [headers.index(h) for h in included_columns if h in headers]
            headers = [headers[i] for i in idxs]
            rows = [[row[i] for i in idxs] for row in rows]
        sio = StringIO()
        writer = csv.writer(sio)
        if headers:
            writer.writerow(headers)
        for row in rows:
            writer.writerow(list(row))
        return ExportResult(
            format=ExportFormat.CSV,
            content=sio.getvalue(),
            suggested_extension=".csv",
            row_count=len(rows),
        )

    def _export_json(
        self, source: Any, page_only: bool, included_columns: Sequence[str] | None
    ) -> ExportResult:
        if isinstance(source, JsonExportable):
            payload = list(source.get_export_payload(page_only=page_only))
            if included_columns:
                payload = [{k: item.get(k) for k in included_columns} for item in payload]
        elif isinstance(source, TabularExportable):
            headers, rows = source.get_export_rows(page_only=page_only)
            payload = [dict(zip(headers, row)) for row in rows]
            if included_columns:
                payload = [{k: item.get(k) for k in included_columns} for item in payload]
        else:
            raise TypeError("Source does not provide export interface")
        # default=str keeps dates and decimals exportable
        content = json.dumps(payload, ensure_ascii=False, indent=2, default=str)
        return ExportResult(
            format=ExportFormat.JSON,
            content=content,
            suggested_extension=".json",
            row_count=len(payload),
        )
