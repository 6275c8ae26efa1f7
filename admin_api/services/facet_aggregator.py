# admin_api/services/facet_aggregator.py
from collections.abc import Hashable, Iterable, Mapping

from admin_api.models.facet import FacetKind
from admin_api.schemas.facet import ProductFacets

# (product_id, facet_id) as returned by a junction table
AssociationRow = tuple[Hashable, Hashable]


def aggregate_facets(
    product_ids: Iterable[Hashable],
    associations: Mapping[FacetKind, Iterable[AssociationRow]],
    facet_names: Mapping[FacetKind, Mapping[Hashable, str]],
) -> dict[Hashable, ProductFacets]:
    """
    Group junction rows into per-product facet name lists.

    - Every requested product gets all five lists, empty when it has no rows.
    - Rows for products that were not requested are ignored.
    - Facet ids missing from `facet_names` (dangling links) are dropped.
    - Names keep the order the rows came in; repeats are skipped.
    """
    result: dict[Hashable, ProductFacets] = {pid: ProductFacets() for pid in product_ids}

    for kind in FacetKind:
        names = facet_names.get(kind, {})
        for product_id, facet_id in associations.get(kind, ()):
            facets = result.get(product_id)
            if facets is None:
                continue
            name = names.get(facet_id)
            if name is None:
                continue
            bucket = facets.names(kind)
            if name not in bucket:
                bucket.append(name)

    return result
