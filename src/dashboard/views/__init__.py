"""Qt view layer rendering data-view state.

Exports:
 - DataTableView
 - EntityListView
"""

from .data_table_view import DataTableView  # noqa: F401
from .entity_list_view import EntityListView  # noqa: F401
