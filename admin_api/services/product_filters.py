# admin_api/services/product_filters.py
"""
In-memory filtering and sorting for the admin product table.

Everything here is pure: rows come in already joined with owner details and
aggregated facet names, and a new list goes out. The whole pipeline re-runs
on every request; there is no pagination.
"""
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from admin_api.models.facet import FacetKind
from admin_api.schemas.product import (
    AdminProductRow,
    ProductFilterParams,
    SortColumn,
    SortDirection,
)

ALL = "all"

# Short prefixes accepted in namespaced facet references ("type:<id>")
KIND_ALIASES: dict[str, FacetKind] = {
    "type": FacetKind.product_type,
    "product_type": FacetKind.product_type,
    "occasion": FacetKind.occasion,
    "color": FacetKind.color,
    "material": FacetKind.material,
    "city": FacetKind.city,
}

_NON_PRICE_CHARS = re.compile(r"[^0-9.]")

FacetNameTables = Mapping[FacetKind, Mapping[str, str]]


def parse_price(raw: Any) -> float:
    """
    '₹1,500.50' -> 1500.5. Anything unparsable sorts as 0.
    """
    if raw is None:
        return 0.0
    cleaned = _NON_PRICE_CHARS.sub("", str(raw))
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def resolve_facet(ref: str, facet_names: FacetNameTables) -> tuple[FacetKind, str] | None:
    """
    Resolve a facet selection to (kind, display name).

    "<kind>:<id>" is looked up in that kind's table only. A bare id is tried
    against product types, occasions, colors, materials, then cities, and the
    first table that knows it wins.
    """
    prefix, sep, raw_id = ref.partition(":")
    if sep and prefix in KIND_ALIASES:
        kind = KIND_ALIASES[prefix]
        name = facet_names.get(kind, {}).get(raw_id)
        return (kind, name) if name is not None else None

    for kind in FacetKind:
        name = facet_names.get(kind, {}).get(ref)
        if name is not None:
            return kind, name
    return None


def _contains(haystack: str | None, needle: str) -> bool:
    return needle in (haystack or "").lower()


def _owner_text(row: AdminProductRow) -> str:
    return " ".join(part for part in (row.owner_name, row.owner_phone) if part)


def _matches_query(row: AdminProductRow, query: str) -> bool:
    return any(
        _contains(value, query)
        for value in (
            row.name,
            str(row.id),
            row.product_code,
            row.facets.text(),
            row.owner_name,
            row.owner_phone,
        )
    )


def filter_products(
    rows: Sequence[AdminProductRow],
    facet_names: FacetNameTables,
    params: ProductFilterParams,
) -> list[AdminProductRow]:
    """
    Keep rows that pass every active filter (all filters are AND-ed).

    A facet selection that resolves to nothing matches no rows.
    """
    predicates: list[Callable[[AdminProductRow], bool]] = []

    if params.owner and params.owner != ALL:
        owner = params.owner
        predicates.append(lambda row: str(row.owner_user_id) == owner)

    if params.facet and params.facet != ALL:
        resolved = resolve_facet(params.facet, facet_names)
        if resolved is None:
            return []
        kind, facet_name = resolved
        predicates.append(lambda row: facet_name in row.facets.names(kind))

    query = params.q.strip().lower()
    if query:
        predicates.append(lambda row: _matches_query(row, query))

    name = params.name.strip().lower()
    if name:
        predicates.append(lambda row: _contains(row.name, name))

    owner_text = params.owner_text.strip().lower()
    if owner_text:
        predicates.append(lambda row: _contains(_owner_text(row), owner_text))

    facet_text = params.facet_text.strip().lower()
    if facet_text:
        predicates.append(lambda row: _contains(row.facets.text(), facet_text))

    product_id = params.product_id.strip().lower()
    if product_id:
        predicates.append(
            lambda row: _contains(row.product_code, product_id)
            or _contains(str(row.id), product_id)
        )

    price = params.price.strip().lower()
    if price:
        predicates.append(lambda row: _contains(str(row.price), price))

    return [row for row in rows if all(predicate(row) for predicate in predicates)]


def _created_ts(row: AdminProductRow) -> float:
    if row.created_at is None:
        return 0.0
    return row.created_at.timestamp()


SORT_KEYS: dict[str, Callable[[AdminProductRow], Any]] = {
    "name": lambda row: row.name.casefold(),
    "type": lambda row: row.type,
    "category": lambda row: row.facets.text().casefold(),
    "product_id": lambda row: str(row.product_code or row.id),
    "price": lambda row: parse_price(row.price),
    "created_at": _created_ts,
}


def sort_products(
    rows: Sequence[AdminProductRow],
    sort_by: SortColumn | None,
    sort_dir: SortDirection = "asc",
) -> list[AdminProductRow]:
    """
    Stable sort on one column. Without a column, input order is kept.
    """
    if sort_by is None:
        return list(rows)
    return sorted(rows, key=SORT_KEYS[sort_by], reverse=sort_dir == "desc")


def apply_pipeline(
    rows: Sequence[AdminProductRow],
    facet_names: FacetNameTables,
    params: ProductFilterParams,
) -> list[AdminProductRow]:
    return sort_products(
        filter_products(rows, facet_names, params),
        params.sort_by,
        params.sort_dir,
    )


def toggle_sort(params: ProductFilterParams, column: SortColumn) -> ProductFilterParams:
    """
    Header click: same column flips direction, a new column starts ascending.
    """
    if params.sort_by == column:
        direction: SortDirection = "desc" if params.sort_dir == "asc" else "asc"
    else:
        direction = "asc"
    return params.model_copy(update={"sort_by": column, "sort_dir": direction})
