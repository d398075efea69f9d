"""Type aliases for dynamic data structures used across the application."""

from typing import Literal

# JSON-compatible value, used for audit snapshots and response payloads
type JsonValue = (
    dict[str, "JsonValue"] | list["JsonValue"] | str | int | float | bool | None
)

# Sort direction accepted by the orderBy query parameter
type SortDirection = Literal["asc", "desc"]

# Parsed orderBy value: column name -> direction
type OrderBy = dict[str, SortDirection]
