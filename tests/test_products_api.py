import uuid

import pytest
from PIL import Image

from tests.helpers import API, STORAGE_PUBLIC, gradient_image, make_token

PRODUCTS = f"{API}/admin/products"


def create_facet(client, headers, kind, name, **extra):
    response = client.post(f"{API}/admin/facets/{kind}", json={"name": name, **extra}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["id"]


def create_product(client, headers, owner_id, title="Red Saree", price="₹500", **extra):
    payload = {"owner_user_id": str(owner_id), "title": title, "price": price, **extra}
    response = client.post(PRODUCTS, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def upload(client, headers, product_id, count=1):
    files = [
        ("files", (f"photo{i}.bmp", gradient_image(64 + i, 64), "image/bmp"))
        for i in range(count)
    ]
    return client.post(f"{PRODUCTS}/{product_id}/images", files=files, headers=headers)


# -------- Auth --------


def test_requires_authentication(client):
    assert client.get(PRODUCTS).status_code == 401


def test_rejects_invalid_token(client):
    headers = {"Authorization": "Bearer not-a-jwt"}
    assert client.get(PRODUCTS, headers=headers).status_code == 401


def test_rejects_non_admin(client):
    headers = {"Authorization": f"Bearer {make_token(uuid.uuid4())}"}
    assert client.get(PRODUCTS, headers=headers).status_code == 403


# -------- CRUD --------


def test_create_product_with_facets(client, auth_headers, member):
    red = create_facet(client, auth_headers, "color", "Red", hex_code="#b22222")
    saree = create_facet(client, auth_headers, "product_type", "Saree")

    product = create_product(
        client,
        auth_headers,
        member.id,
        product_code="RS-01",
        facets={"color_ids": [red], "product_type_ids": [saree]},
    )

    assert product["status"] == "pending"
    assert product["is_active"] is False
    assert product["listing_status"] == "Paid"
    assert product["images"] == []
    assert product["facets"] == {
        "product_types": ["Saree"],
        "occasions": [],
        "colors": ["Red"],
        "materials": [],
        "cities": [],
    }


def test_create_rejects_unknown_owner_and_facets(client, auth_headers, member):
    response = client.post(
        PRODUCTS,
        json={"owner_user_id": str(uuid.uuid4()), "title": "X", "price": "1"},
        headers=auth_headers,
    )
    assert response.status_code == 400

    response = client.post(
        PRODUCTS,
        json={
            "owner_user_id": str(member.id),
            "title": "X",
            "price": "1",
            "facets": {"material_ids": [str(uuid.uuid4())]},
        },
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert "material" in response.json()["detail"]


def test_create_rejects_blank_title(client, auth_headers, member):
    response = client.post(
        PRODUCTS,
        json={"owner_user_id": str(member.id), "title": "  ", "price": "1"},
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_update_replaces_facet_links(client, auth_headers, member):
    red = create_facet(client, auth_headers, "color", "Red")
    blue = create_facet(client, auth_headers, "color", "Blue")
    product = create_product(client, auth_headers, member.id, facets={"color_ids": [red]})

    response = client.patch(
        f"{PRODUCTS}/{product['id']}",
        json={"title": "Blue Saree", "facets": {"color_ids": [blue]}},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Blue Saree"
    assert body["facets"]["colors"] == ["Blue"]


def test_get_missing_product_is_404(client, auth_headers):
    assert client.get(f"{PRODUCTS}/{uuid.uuid4()}", headers=auth_headers).status_code == 404


def test_moderation_status_drives_is_active(client, auth_headers, member):
    product = create_product(client, auth_headers, member.id)
    url = f"{PRODUCTS}/{product['id']}/status"

    approved = client.patch(url, json={"status": "approved", "admin_note": "ok"}, headers=auth_headers)
    assert approved.json()["is_active"] is True
    assert approved.json()["admin_note"] == "ok"

    rejected = client.patch(url, json={"status": "rejected"}, headers=auth_headers)
    assert rejected.json()["is_active"] is False
    assert rejected.json()["admin_note"] == "ok"


def test_listing_status(client, auth_headers, member):
    product = create_product(client, auth_headers, member.id)
    url = f"{PRODUCTS}/{product['id']}/listing-status"

    assert client.patch(url, json={"listing_status": "Free"}, headers=auth_headers).json()[
        "listing_status"
    ] == "Free"
    assert client.patch(url, json={"listing_status": "Sold"}, headers=auth_headers).status_code == 422


# -------- Admin table --------


def test_table_rows_filter_and_sort(client, auth_headers, member):
    red = create_facet(client, auth_headers, "color", "Red")
    create_product(client, auth_headers, member.id, "Red Saree", "₹500", facets={"color_ids": [red]})
    create_product(client, auth_headers, member.id, "Blue Choli", "₹300")

    rows = client.get(PRODUCTS, params={"sort_by": "price"}, headers=auth_headers).json()
    assert [r["name"] for r in rows] == ["Blue Choli", "Red Saree"]
    assert rows[0]["owner_name"] == "Asha Rao"
    assert rows[0]["type"] == "Rent"

    rows = client.get(
        PRODUCTS, params={"sort_by": "price", "sort_dir": "desc"}, headers=auth_headers
    ).json()
    assert [r["name"] for r in rows] == ["Red Saree", "Blue Choli"]

    rows = client.get(PRODUCTS, params={"q": "red"}, headers=auth_headers).json()
    assert [r["name"] for r in rows] == ["Red Saree"]

    rows = client.get(PRODUCTS, params={"facet": f"color:{red}"}, headers=auth_headers).json()
    assert [r["name"] for r in rows] == ["Red Saree"]
    assert rows[0]["facets"]["colors"] == ["Red"]

    rows = client.get(PRODUCTS, params={"facet": red}, headers=auth_headers).json()
    assert [r["name"] for r in rows] == ["Red Saree"]

    rows = client.get(PRODUCTS, params={"owner_text": "98765"}, headers=auth_headers).json()
    assert len(rows) == 2


def test_table_rejects_unknown_sort_column(client, auth_headers):
    response = client.get(PRODUCTS, params={"sort_by": "colour"}, headers=auth_headers)
    assert response.status_code == 422


def test_sort_link_toggles(client, auth_headers):
    response = client.get(
        f"{PRODUCTS}/sort-link",
        params={"q": "silk", "sort_by": "price", "sort_dir": "asc", "column": "price"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["params"]["sort_dir"] == "desc"
    assert body["query_string"] == "q=silk&sort_by=price&sort_dir=desc"


# -------- Gallery --------


def test_upload_stores_webp_objects(client, auth_headers, member, storage):
    product = create_product(client, auth_headers, member.id)

    response = upload(client, auth_headers, product["id"], count=2)

    assert response.status_code == 200, response.text
    images = response.json()["images"]
    assert len(images) == 2
    prefix = f"{STORAGE_PUBLIC}/product-images/products/{product['id']}/"
    assert all(url.startswith(prefix) and url.endswith(".webp") for url in images)
    assert len(storage.objects) == 2
    assert set(storage.content_types.values()) == {"image/webp"}
    for data in storage.objects.values():
        assert data[8:12] == b"WEBP"


def test_upload_rejects_undecodable_file(client, auth_headers, member, storage):
    product = create_product(client, auth_headers, member.id)
    files = [
        ("files", ("ok.bmp", gradient_image(32, 32), "image/bmp")),
        ("files", ("broken.png", b"not really a png", "image/png")),
    ]

    response = client.post(f"{PRODUCTS}/{product['id']}/images", files=files, headers=auth_headers)

    assert response.status_code == 400
    assert storage.objects == {}


def test_upload_rejects_decompression_bomb(client, auth_headers, member, storage, monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    product = create_product(client, auth_headers, member.id)
    files = [("files", ("huge.png", gradient_image(64, 64, fmt="PNG"), "image/png"))]

    response = client.post(f"{PRODUCTS}/{product['id']}/images", files=files, headers=auth_headers)

    assert response.status_code == 400
    assert storage.objects == {}


def test_upload_rejects_unsupported_type(client, auth_headers, member):
    product = create_product(client, auth_headers, member.id)
    files = [("files", ("notes.txt", b"hello", "text/plain"))]

    response = client.post(f"{PRODUCTS}/{product['id']}/images", files=files, headers=auth_headers)

    assert response.status_code == 400


def test_storage_failure_is_502(client, auth_headers, member, storage):
    product = create_product(client, auth_headers, member.id)
    storage.fail_uploads = True

    response = upload(client, auth_headers, product["id"])

    assert response.status_code == 502
    detail = client.get(f"{PRODUCTS}/{product['id']}", headers=auth_headers).json()
    assert detail["images"] == []


def test_image_limit(client, auth_headers, member, monkeypatch):
    monkeypatch.setattr("admin_api.services.product_service.MAX_IMAGES_PER_PRODUCT", 1)
    product = create_product(client, auth_headers, member.id)

    response = upload(client, auth_headers, product["id"], count=2)

    assert response.status_code == 400


def test_remove_image_keeps_primary_on_same_picture(client, auth_headers, member, storage):
    product = create_product(client, auth_headers, member.id)
    images = upload(client, auth_headers, product["id"], count=3).json()["images"]
    base = f"{PRODUCTS}/{product['id']}/images"

    client.put(f"{base}/primary", json={"index": 2}, headers=auth_headers)
    response = client.delete(f"{base}/0", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["images"] == images[1:]
    assert body["primary_image_index"] == 1
    removed_path = images[0].split("/product-images/", 1)[1]
    assert removed_path in storage.removed


def test_remove_primary_image_falls_back_to_first(client, auth_headers, member):
    product = create_product(client, auth_headers, member.id)
    upload(client, auth_headers, product["id"], count=2)
    base = f"{PRODUCTS}/{product['id']}/images"

    client.put(f"{base}/primary", json={"index": 1}, headers=auth_headers)
    body = client.delete(f"{base}/1", headers=auth_headers).json()

    assert body["primary_image_index"] == 0
    assert len(body["images"]) == 1


def test_remove_image_out_of_range(client, auth_headers, member):
    product = create_product(client, auth_headers, member.id)
    response = client.delete(f"{PRODUCTS}/{product['id']}/images/0", headers=auth_headers)
    assert response.status_code == 404


def test_primary_image_out_of_range(client, auth_headers, member):
    product = create_product(client, auth_headers, member.id)
    response = client.put(
        f"{PRODUCTS}/{product['id']}/images/primary", json={"index": 0}, headers=auth_headers
    )
    assert response.status_code == 400


def test_reorder_images_primary_follows_picture(client, auth_headers, member):
    product = create_product(client, auth_headers, member.id)
    images = upload(client, auth_headers, product["id"], count=3).json()["images"]
    base = f"{PRODUCTS}/{product['id']}/images"
    client.put(f"{base}/primary", json={"index": 2}, headers=auth_headers)

    response = client.put(f"{base}/order", json={"order": [2, 0, 1]}, headers=auth_headers)

    body = response.json()
    assert body["images"] == [images[2], images[0], images[1]]
    assert body["primary_image_index"] == 0


@pytest.mark.parametrize("order", [[0, 1], [0, 0, 1], [0, 1, 3]])
def test_reorder_images_requires_permutation(client, auth_headers, member, order):
    product = create_product(client, auth_headers, member.id)
    upload(client, auth_headers, product["id"], count=3)

    response = client.put(
        f"{PRODUCTS}/{product['id']}/images/order", json={"order": order}, headers=auth_headers
    )

    assert response.status_code == 400


def test_delete_product_removes_images(client, auth_headers, member, storage):
    product = create_product(client, auth_headers, member.id)
    upload(client, auth_headers, product["id"], count=2)
    assert len(storage.objects) == 2

    response = client.delete(f"{PRODUCTS}/{product['id']}", headers=auth_headers)

    assert response.status_code == 204
    assert storage.objects == {}
    assert client.get(f"{PRODUCTS}/{product['id']}", headers=auth_headers).status_code == 404
