"""DataTableView

QTableWidget-based renderer for a ``DataTableViewModel``. The widget owns no
table logic: user events are forwarded to the view model and the returned
``ViewState`` is rendered back (rows, sort indicator, checkboxes, footer).

Search keystrokes are debounced here, at the event-dispatch boundary, so the
engine itself stays synchronous.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import (
    QCheckBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from dashboard.services.columns import Align, ColumnDescriptor, status_tone
from dashboard.services.export_service import ExportResult, ExportService
from dashboard.services.settings_service import SettingsService
from dashboard.services.table_sort import SortDirection
from dashboard.viewmodels.data_table_viewmodel import DataTableViewModel, ViewState

__all__ = ["DataTableView"]

_ALIGN = {
    Align.LEFT: Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter,
    Align.CENTER: Qt.AlignmentFlag.AlignCenter,
    Align.RIGHT: Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter,
}

TONE_ROLE = Qt.ItemDataRole.UserRole.value + 1


class DataTableView(QWidget):
    def __init__(
        self,
        viewmodel: DataTableViewModel,
        parent: Optional[QWidget] = None,
        *,
        title: str = "",
        debounce_ms: int | None = None,
    ):
        super().__init__(parent)
        self.viewmodel = viewmodel
        self._populating = False
        if debounce_ms is None:
            debounce_ms = SettingsService.instance.search_debounce_ms
        self._debounce = QTimer(self)
        self._debounce.setSingleShot(True)
        self._debounce.setInterval(max(0, debounce_ms))
        self._debounce.timeout.connect(self._apply_pending_search)  # type: ignore
        self._pending_search: Optional[str] = None
        self._build_ui(title)
        self.render(viewmodel.state())

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_ui(self, title: str) -> None:
        root = QVBoxLayout(self)
        self.title_label = QLabel(title)
        self.title_label.setObjectName("dataTableTitle")
        self.title_label.setVisible(bool(title))
        root.addWidget(self.title_label)

        toolbar = QHBoxLayout()
        self.search_box = QLineEdit()
        self.search_box.setPlaceholderText("Search...")
        self.search_box.textChanged.connect(self.schedule_search)  # type: ignore
        toolbar.addWidget(self.search_box, 1)
        self.selection_label = QLabel("")
        self.clear_button = QPushButton("Clear")
        self.clear_button.clicked.connect(self._on_clear_clicked)  # type: ignore
        toolbar.addWidget(self.selection_label)
        toolbar.addWidget(self.clear_button)
        root.addLayout(toolbar)

        self.select_all_box = QCheckBox("Select all")
        self.select_all_box.clicked.connect(self._on_select_all)  # type: ignore
        self.select_all_box.setVisible(self.viewmodel.selectable)
        root.addWidget(self.select_all_box)

        self._offset = 1 if self.viewmodel.selectable else 0
        self.table = QTableWidget(0, len(self.viewmodel.columns) + self._offset)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setStretchLastSection(True)
        header.sectionClicked.connect(self._on_header_clicked)  # type: ignore
        self.table.cellClicked.connect(self._on_cell_clicked)  # type: ignore
        self.table.itemChanged.connect(self._on_item_changed)  # type: ignore
        root.addWidget(self.table)

        self.empty_label = QLabel("")
        self.empty_label.setObjectName("dataTableEmptyState")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self.empty_label)

        self.footer = QWidget()
        footer_layout = QHBoxLayout(self.footer)
        footer_layout.setContentsMargins(0, 0, 0, 0)
        self.range_label = QLabel("")
        footer_layout.addWidget(self.range_label, 1)
        self.prev_button = QPushButton("Previous")
        self.prev_button.clicked.connect(self._on_previous)  # type: ignore
        footer_layout.addWidget(self.prev_button)
        self._page_buttons_layout = QHBoxLayout()
        footer_layout.addLayout(self._page_buttons_layout)
        self.next_button = QPushButton("Next")
        self.next_button.clicked.connect(self._on_next)  # type: ignore
        footer_layout.addWidget(self.next_button)
        root.addWidget(self.footer)
        self.page_buttons: List[QPushButton] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def set_records(self, records: Iterable[Any]) -> None:
        self.render(self.viewmodel.set_records(records))

    def schedule_search(self, text: str) -> None:
        """Debounced search dispatch (immediate when the interval is 0)."""
        self._pending_search = text
        if self._debounce.interval() == 0:
            self._apply_pending_search()
        else:
            self._debounce.start()

    def flush_search(self) -> None:
        """Dispatch a pending search right away (e.g. on Enter)."""
        self._debounce.stop()
        self._apply_pending_search()

    def column_texts(self, key: str) -> List[str]:
        col = self._column_index(key)
        out: List[str] = []
        for r in range(self.table.rowCount()):
            item = self.table.item(r, col)
            out.append(item.text() if item else "")
        return out

    def is_empty_state_active(self) -> bool:
        return not self.empty_label.isHidden()

    def get_export_rows(self, *, page_only: bool = False):
        return self.viewmodel.get_export_rows(page_only=page_only)

    def get_export_payload(self, *, page_only: bool = False):
        return self.viewmodel.get_export_payload(page_only=page_only)

    def export(self, fmt: str, *, page_only: bool = False) -> Optional[ExportResult]:
        """Export the current view, or None when export is switched off in settings."""
        if not SettingsService.instance.export_enabled:
            return None
        return ExportService().export(self, fmt, page_only=page_only)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, state: ViewState) -> None:
        self._populating = True
        try:
            self.table.setHorizontalHeaderLabels(self._header_labels(state))
            self.table.setRowCount(len(state.visible))
            for r, record in enumerate(state.visible):
                if self._offset:
                    check = QTableWidgetItem()
                    check.setFlags(
                        Qt.ItemFlag.ItemIsUserCheckable | Qt.ItemFlag.ItemIsEnabled
                    )
                    checked = r in state.selected_indices
                    check.setCheckState(
                        Qt.CheckState.Checked if checked else Qt.CheckState.Unchecked
                    )
                    self.table.setItem(r, 0, check)
                for c, column in enumerate(self.viewmodel.columns):
                    self.table.setItem(r, c + self._offset, self._cell(column, record))
            self.select_all_box.setChecked(state.all_selected)
        finally:
            self._populating = False
        self.empty_label.setText(state.empty_message)
        self.empty_label.setVisible(state.is_empty)
        self.selection_label.setText(f"{state.selected_count} selected")
        self.selection_label.setVisible(state.selected_count > 0)
        self.clear_button.setVisible(state.selected_count > 0)
        self._render_footer(state)

    def _cell(self, column: ColumnDescriptor, record: Any) -> QTableWidgetItem:
        item = QTableWidgetItem(column.display_text(record))
        item.setFlags(Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable)
        item.setTextAlignment(_ALIGN[column.align])
        if column.is_status:
            item.setData(TONE_ROLE, status_tone(column.value(record)))
        return item

    def _header_labels(self, state: ViewState) -> List[str]:
        labels = [""] if self._offset else []
        directive = state.sort_directive
        for column in self.viewmodel.columns:
            label = column.label
            if column.sortable:
                if directive is not None and directive.key == column.key:
                    label += " ▲" if directive.direction is SortDirection.ASC else " ▼"
                else:
                    label += " ↕"
            labels.append(label)
        return labels

    def _render_footer(self, state: ViewState) -> None:
        self.footer.setVisible(state.show_pagination)
        self.range_label.setText(state.page_range.as_text())
        self.prev_button.setEnabled(state.has_previous)
        self.next_button.setEnabled(state.has_next)
        for button in self.page_buttons:
            self._page_buttons_layout.removeWidget(button)
            button.deleteLater()
        self.page_buttons = []
        for number in state.page_window:
            button = QPushButton(str(number))
            button.setCheckable(True)
            button.setChecked(number == state.current_page)
            button.clicked.connect(lambda _checked=False, n=number: self._on_page(n))  # type: ignore
            self._page_buttons_layout.addWidget(button)
            self.page_buttons.append(button)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _apply_pending_search(self) -> None:
        if self._pending_search is None:
            return
        term, self._pending_search = self._pending_search, None
        self.render(self.viewmodel.set_search_term(term))

    def _on_header_clicked(self, logical_index: int) -> None:
        position = logical_index - self._offset
        if position < 0:
            return
        self.render(self.viewmodel.sort_by(self.viewmodel.columns[position].key))

    def _on_cell_clicked(self, row: int, column: int) -> None:
        if column < self._offset:
            return
        self.viewmodel.click_row(row)

    def _on_item_changed(self, item: QTableWidgetItem) -> None:
        if self._populating or item.column() >= self._offset:
            return
        self.viewmodel.toggle_row(item.row())
        self.render(self.viewmodel.state())

    def _on_select_all(self, checked: bool) -> None:
        self.viewmodel.select_all(checked)
        self.render(self.viewmodel.state())

    def _on_clear_clicked(self) -> None:
        self.viewmodel.clear_selection()
        self.render(self.viewmodel.state())

    def _on_page(self, number: int) -> None:
        self.render(self.viewmodel.go_to_page(number))

    def _on_previous(self) -> None:
        self.render(self.viewmodel.previous_page())

    def _on_next(self) -> None:
        self.render(self.viewmodel.next_page())

    def _column_index(self, key: str) -> int:
        return self.viewmodel.columns.keys().index(key) + self._offset
