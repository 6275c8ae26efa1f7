import uuid

from tests.helpers import API, STORAGE_PUBLIC, gradient_image

CATEGORIES = f"{API}/admin/categories"
SLIDES = f"{API}/admin/hero-slides"


def banner(width=80, height=40):
    return {"file": ("banner.bmp", gradient_image(width, height), "image/bmp")}


# -------- Categories --------


def test_category_slugs_are_generated_and_unique(client, auth_headers):
    first = client.post(CATEGORIES, json={"name": "Bridal Wear!"}, headers=auth_headers)
    second = client.post(CATEGORIES, json={"name": "Bridal  wear"}, headers=auth_headers)

    assert first.status_code == 201
    assert first.json()["slug"] == "bridal-wear"
    assert second.json()["slug"] == "bridal-wear-2"
    assert (first.json()["display_order"], second.json()["display_order"]) == (0, 1)


def test_category_update_and_delete(client, auth_headers):
    category = client.post(CATEGORIES, json={"name": "Men"}, headers=auth_headers).json()
    url = f"{CATEGORIES}/{category['id']}"

    updated = client.patch(url, json={"name": "Menswear", "slug": "Mens Wear"}, headers=auth_headers)
    assert updated.json()["name"] == "Menswear"
    assert updated.json()["slug"] == "mens-wear"

    assert client.delete(url, headers=auth_headers).status_code == 204
    assert client.patch(url, json={"name": "X"}, headers=auth_headers).status_code == 404


def test_category_reorder(client, auth_headers):
    ids = [
        client.post(CATEGORIES, json={"name": name}, headers=auth_headers).json()["id"]
        for name in ("Women", "Men", "Kids")
    ]

    response = client.put(
        f"{CATEGORIES}/order", json={"ids": list(reversed(ids))}, headers=auth_headers
    )

    assert [c["name"] for c in response.json()] == ["Kids", "Men", "Women"]
    missing = client.put(f"{CATEGORIES}/order", json={"ids": ids[:2]}, headers=auth_headers)
    assert missing.status_code == 400


def test_new_category_goes_after_highest_order(client, auth_headers):
    ids = [
        client.post(CATEGORIES, json={"name": name}, headers=auth_headers).json()["id"]
        for name in ("Women", "Men", "Kids")
    ]
    assert client.delete(f"{CATEGORIES}/{ids[1]}", headers=auth_headers).status_code == 204

    ethnic = client.post(CATEGORIES, json={"name": "Ethnic"}, headers=auth_headers).json()

    assert ethnic["display_order"] == 3
    listed = client.get(CATEGORIES, headers=auth_headers).json()
    assert [c["name"] for c in listed] == ["Women", "Kids", "Ethnic"]


def test_category_image(client, auth_headers, storage):
    category = client.post(CATEGORIES, json={"name": "Women"}, headers=auth_headers).json()

    response = client.post(
        f"{CATEGORIES}/{category['id']}/image", files=banner(), headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json()["image_url"].startswith(f"{STORAGE_PUBLIC}/product-images/categories/")
    assert len(storage.objects) == 1


# -------- Hero slides --------


def test_upload_slide_appends_to_carousel(client, auth_headers, storage):
    first = client.post(
        f"{SLIDES}/upload",
        files=banner(),
        data={"title": "Wedding season", "link_url": "/collections/wedding"},
        headers=auth_headers,
    )
    second = client.post(f"{SLIDES}/upload", files=banner(), headers=auth_headers)

    assert first.status_code == 201, first.text
    assert first.json()["title"] == "Wedding season"
    assert first.json()["link_url"] == "/collections/wedding"
    assert first.json()["is_active"] is True
    assert second.json()["display_order"] == 1
    assert "/product-images/hero/" in second.json()["image_url"]
    assert len(storage.objects) == 2


def test_slide_from_existing_url_and_active_filter(client, auth_headers):
    active = client.post(
        SLIDES, json={"image_url": "https://cdn.test/a.webp"}, headers=auth_headers
    ).json()
    hidden = client.post(
        SLIDES, json={"image_url": "https://cdn.test/b.webp", "is_active": False}, headers=auth_headers
    ).json()

    everything = client.get(SLIDES, headers=auth_headers).json()
    only_active = client.get(SLIDES, params={"only_active": True}, headers=auth_headers).json()

    assert [s["id"] for s in everything] == [active["id"], hidden["id"]]
    assert [s["id"] for s in only_active] == [active["id"]]


def test_toggle_slide(client, auth_headers):
    slide = client.post(
        SLIDES, json={"image_url": "https://cdn.test/a.webp"}, headers=auth_headers
    ).json()

    response = client.patch(
        f"{SLIDES}/{slide['id']}", json={"is_active": False, "title": "Off"}, headers=auth_headers
    )

    assert response.json()["is_active"] is False
    assert response.json()["title"] == "Off"


def test_replace_and_delete_slide_image(client, auth_headers, storage):
    slide = client.post(f"{SLIDES}/upload", files=banner(), headers=auth_headers).json()
    old_path = slide["image_url"].split("/product-images/", 1)[1]

    replaced = client.post(f"{SLIDES}/{slide['id']}/image", files=banner(60, 30), headers=auth_headers)
    assert replaced.status_code == 200
    assert old_path in storage.removed
    assert len(storage.objects) == 1

    assert client.delete(f"{SLIDES}/{slide['id']}", headers=auth_headers).status_code == 204
    assert storage.objects == {}


def test_slide_reorder_and_missing(client, auth_headers):
    ids = [
        client.post(SLIDES, json={"image_url": f"https://cdn.test/{i}.webp"}, headers=auth_headers)
        .json()["id"]
        for i in range(2)
    ]

    response = client.put(f"{SLIDES}/order", json={"ids": [ids[1], ids[0]]}, headers=auth_headers)

    assert [s["id"] for s in response.json()] == [ids[1], ids[0]]
    assert client.delete(f"{SLIDES}/{uuid.uuid4()}", headers=auth_headers).status_code == 404


def test_new_slide_goes_after_highest_order(client, auth_headers):
    ids = [
        client.post(SLIDES, json={"image_url": f"https://cdn.test/{i}.webp"}, headers=auth_headers)
        .json()["id"]
        for i in range(3)
    ]
    assert client.delete(f"{SLIDES}/{ids[0]}", headers=auth_headers).status_code == 204

    latest = client.post(
        SLIDES, json={"image_url": "https://cdn.test/latest.webp"}, headers=auth_headers
    ).json()

    assert latest["display_order"] == 3
    orders = [s["display_order"] for s in client.get(SLIDES, headers=auth_headers).json()]
    assert orders == [1, 2, 3]
