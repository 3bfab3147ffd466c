import json

import pytest

from dashboard.services.columns import ColumnDescriptor
from dashboard.services.export_service import ExportFormat, ExportService
from dashboard.viewmodels.data_table_viewmodel import DataTableViewModel

from factories import user_dicts


@pytest.fixture()
def vm():
    cols = [
        ColumnDescriptor("name", "Name", sortable=True),
        ColumnDescriptor("age", "Age", sortable=True, render=lambda v, r: f"{v}y"),
    ]
    model = DataTableViewModel(cols, user_dicts(8), page_size=3)
    model.sort_by("age")
    model.sort_by("age")
    return model


def test_csv_export_all_filtered_rows(vm):
    vm.set_search_term("user 0")
    result = ExportService().export(vm, ExportFormat.CSV)
    lines = result.content.strip().splitlines()
    assert lines[0] == "Name,Age"
    assert lines[1] == "User 08,28y"
    assert result.row_count == 8
    assert result.suggested_extension == ".csv"


def test_csv_page_only_and_column_subset(vm):
    result = ExportService().export(vm, ExportFormat.CSV, page_only=True, included_columns=["Age"])
    assert result.content.strip().splitlines() == ["Age", "28y", "27y", "26y"]


def test_json_export_uses_raw_values(vm):
    result = ExportService().export(vm, ExportFormat.JSON, page_only=True)
    data = json.loads(result.content)
    assert data[0] == {"name": "User 08", "age": 28}
    subset = json.loads(
        ExportService().export(vm, ExportFormat.JSON, included_columns=["age"]).content
    )
    assert subset[-1] == {"age": 21}


def test_unsupported_format_and_source(vm):
    with pytest.raises(ValueError):
        ExportService().export(vm, "xlsx")
    with pytest.raises(TypeError):
        ExportService().export(object(), ExportFormat.CSV)
