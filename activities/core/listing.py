from typing import Literal, Tuple

SortBy = Literal["name", "date"]


def order_for(sort_by: SortBy, name_column: str = "name") -> Tuple[str, bool]:
    """Map a sort choice to (column, desc): names ascending, dates newest first."""
    if sort_by == "name":
        return name_column, False
    return "created_at", True


def matches_search(value: str, search: str) -> bool:
    return search.strip().lower() in (value or "").lower()
