from admin_api.models.catalog import Category
from admin_api.models.facet import FacetKind, Material
from admin_api.models.product import Product
from admin_api.repositories.catalog_repo import CatalogRepository
from admin_api.repositories.facet_repo import FacetRepository
from admin_api.repositories.product_repo import ProductRepository
from admin_api.repositories.user_repo import UserRepository


def test_list_all_returns_typed_rows(session, member):
    session.add(Product(owner_user_id=member.id, title="Kanjivaram Saree", price="₹1200"))
    session.add(Material(name="Silk"))
    session.commit()

    assert [u.name for u in UserRepository().list_all(session)] == ["Asha Rao"]
    assert [p.title for p in ProductRepository().list_all(session)] == ["Kanjivaram Saree"]
    assert ProductRepository().list_all(session, owner_user_id=member.id)[0].price == "₹1200"
    assert [m.name for m in FacetRepository().list_all(session, FacetKind.material)] == ["Silk"]


def test_next_display_order_follows_the_highest_row(session):
    repo = FacetRepository()
    assert repo.next_display_order(session, FacetKind.material) == 0

    session.add(Material(name="Silk", display_order=0))
    session.add(Material(name="Linen", display_order=4))
    session.commit()

    assert repo.next_display_order(session, FacetKind.material) == 5
    assert repo.count(session, FacetKind.material) == 2


def test_next_category_and_slide_order_on_empty_tables(session):
    repo = CatalogRepository()
    assert repo.next_category_order(session) == 0
    assert repo.next_slide_order(session) == 0

    session.add(Category(name="Bridal", slug="bridal", display_order=2))
    session.commit()

    assert repo.next_category_order(session) == 3
