"""Тесты админ API: форма товара, лимит категорий, авторизация."""
import uuid

import pytest

from app.core.security import create_access_token, get_password_hash
from app.models.business import Business
from app.models.user import User
from app.services.category_service import CategoryService

BASE = "/api/v1/admin/demo-shop"


def ids(categories, *names):
    return [str(categories[name].id) for name in names]


async def create_product(client, auth_headers, category_ids, title="E-reader"):
    return await client.post(
        f"{BASE}/products",
        json={"title": title, "price": "129.00", "category_ids": category_ids},
        headers=auth_headers,
    )


async def test_two_categories_accepted(client, auth_headers, categories):
    response = await create_product(client, auth_headers, ids(categories, "Electronics", "Books"))

    assert response.status_code == 201
    data = response.json()
    assert set(data["category_ids"]) == set(ids(categories, "Electronics", "Books"))


async def test_third_category_rejected_on_submit(client, auth_headers, categories):
    response = await create_product(
        client, auth_headers, ids(categories, "Electronics", "Books", "Toys")
    )

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["attribute"] == "category_ids"
    assert detail["max_items"] == 2
    assert detail["selected_count"] == 3
    assert detail["message"] == "Можно выбрать не более 2 категорий (выбрано: 3)"


async def test_duplicate_ids_in_submission_not_rejected(client, auth_headers, categories):
    electronics, books = ids(categories, "Electronics", "Books")

    response = await create_product(client, auth_headers, [electronics, electronics, books])

    assert response.status_code == 201
    assert sorted(response.json()["category_ids"]) == sorted([electronics, books])


async def test_update_rejected_then_accepted_after_removing_one(client, auth_headers, categories):
    created = await create_product(client, auth_headers, ids(categories, "Electronics", "Books"))
    product_id = created.json()["id"]

    rejected = await client.put(
        f"{BASE}/products/{product_id}",
        json={"category_ids": ids(categories, "Electronics", "Books", "Toys")},
        headers=auth_headers,
    )
    assert rejected.status_code == 422

    # Товар не изменился
    current = await client.get(f"/api/v1/products/{product_id}")
    assert set(current.json()["category_ids"]) == set(ids(categories, "Electronics", "Books"))

    accepted = await client.put(
        f"{BASE}/products/{product_id}",
        json={"category_ids": ids(categories, "Electronics", "Toys")},
        headers=auth_headers,
    )
    assert accepted.status_code == 200
    assert set(accepted.json()["category_ids"]) == set(ids(categories, "Electronics", "Toys"))


async def test_resubmission_is_idempotent(client, auth_headers, categories):
    created = await create_product(client, auth_headers, ids(categories, "Electronics", "Books"))
    product_id = created.json()["id"]
    payload = {"category_ids": ids(categories, "Electronics", "Books")}

    first = await client.patch(f"{BASE}/products/{product_id}", json=payload, headers=auth_headers)
    second = await client.patch(f"{BASE}/products/{product_id}", json=payload, headers=auth_headers)

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()


async def test_unknown_category_is_bad_request(client, auth_headers, categories):
    response = await create_product(client, auth_headers, [str(uuid.uuid4())])

    assert response.status_code == 400


async def test_product_form_schema(client, auth_headers, categories):
    response = await client.get(f"{BASE}/products/form", headers=auth_headers)

    assert response.status_code == 200
    fields = {field["name"]: field for field in response.json()["fields"]}
    category_field = fields["category_ids"]
    assert category_field["multiple"] is True
    assert category_field["max_items"] == 2
    assert [option["label"] for option in category_field["options"]] == ["Electronics", "Books", "Toys"]
    assert not any(option["disabled"] for option in category_field["options"])


async def test_edit_form_disables_options_at_limit(client, auth_headers, categories):
    created = await create_product(client, auth_headers, ids(categories, "Electronics", "Books"))

    response = await client.get(
        f"{BASE}/products/form",
        params={"product_id": created.json()["id"]},
        headers=auth_headers,
    )

    fields = {field["name"]: field for field in response.json()["fields"]}
    options = {option["label"]: option for option in fields["category_ids"]["options"]}
    assert options["Toys"]["disabled"] is True
    assert options["Electronics"]["disabled"] is False
    assert fields["title"]["value"] == "E-reader"


async def test_adding_third_category_blocked_by_options(client, auth_headers, categories):
    response = await client.post(
        f"{BASE}/products/form/category-options",
        json={
            "category_ids": ids(categories, "Electronics", "Books"),
            "add": str(categories["Toys"].id),
        },
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["accepted"] is False
    assert data["selected"] == ids(categories, "Electronics", "Books")
    assert data["can_add_more"] is False
    options = {option["label"]: option for option in data["options"]}
    assert options["Toys"]["disabled"] is True


async def test_adding_second_category_allowed_by_options(client, auth_headers, categories):
    response = await client.post(
        f"{BASE}/products/form/category-options",
        json={"category_ids": ids(categories, "Electronics"), "add": str(categories["Books"].id)},
        headers=auth_headers,
    )

    data = response.json()
    assert data["accepted"] is True
    assert data["selected"] == ids(categories, "Electronics", "Books")
    assert data["remaining"] == 0


async def test_unknown_id_in_selection_not_counted_by_options(client, auth_headers, categories):
    response = await client.post(
        f"{BASE}/products/form/category-options",
        json={"category_ids": [*ids(categories, "Electronics"), str(uuid.uuid4())]},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["selected"] == ids(categories, "Electronics")
    assert data["selected_count"] == 1
    assert data["can_add_more"] is True
    options = {option["label"]: option for option in data["options"]}
    assert options["Books"]["disabled"] is False
    assert options["Toys"]["disabled"] is False


async def test_adding_unknown_category_refused_by_options(client, auth_headers, categories):
    response = await client.post(
        f"{BASE}/products/form/category-options",
        json={"category_ids": ids(categories, "Electronics"), "add": str(uuid.uuid4())},
        headers=auth_headers,
    )

    data = response.json()
    assert data["accepted"] is False
    assert data["selected"] == ids(categories, "Electronics")
    assert data["selected_count"] == 1


async def test_adding_category_of_other_business_refused_by_options(client, db, owner, auth_headers, categories):
    other = Business(owner_id=owner.id, name="Other shop", slug="other-shop")
    db.add(other)
    await db.commit()
    foreign_category = await CategoryService(db).create(business_id=other.id, name="Garden")

    response = await client.post(
        f"{BASE}/products/form/category-options",
        json={"category_ids": ids(categories, "Electronics"), "add": str(foreign_category.id)},
        headers=auth_headers,
    )

    data = response.json()
    assert data["accepted"] is False
    assert data["selected"] == ids(categories, "Electronics")


async def test_limit_error_uses_current_422_status(client, auth_headers, categories, recwarn):
    response = await create_product(
        client, auth_headers, ids(categories, "Electronics", "Books", "Toys")
    )

    assert response.status_code == 422
    assert not [w for w in recwarn if "HTTP_422" in str(w.message)]


async def test_business_limit_setting(client, auth_headers, categories):
    response = await client.get(f"{BASE}/settings/max-product-categories", headers=auth_headers)
    assert response.json() == {"max_items": 2}

    response = await client.put(
        f"{BASE}/settings/max-product-categories",
        json={"max_items": 3},
        headers=auth_headers,
    )
    assert response.status_code == 200

    created = await create_product(
        client, auth_headers, ids(categories, "Electronics", "Books", "Toys")
    )
    assert created.status_code == 201


async def test_negative_limit_setting_rejected(client, auth_headers, business):
    response = await client.put(
        f"{BASE}/settings/max-product-categories",
        json={"max_items": -1},
        headers=auth_headers,
    )

    assert response.status_code == 400


async def test_delete_category_unlinks_products(client, auth_headers, categories):
    created = await create_product(client, auth_headers, ids(categories, "Electronics", "Books"))

    response = await client.delete(
        f"{BASE}/categories/{categories['Books'].id}", headers=auth_headers
    )
    assert response.status_code == 204

    product = await client.get(f"/api/v1/products/{created.json()['id']}")
    assert product.json()["category_ids"] == ids(categories, "Electronics")


async def test_public_product_list_filtered_by_category(client, auth_headers, categories):
    await create_product(client, auth_headers, ids(categories, "Electronics", "Books"), title="E-reader")
    await create_product(client, auth_headers, ids(categories, "Toys"), title="Robot")

    response = await client.get(
        "/api/v1/products/demo-shop/products", params={"category": str(categories["Toys"].id)}
    )

    assert response.status_code == 200
    assert [product["title"] for product in response.json()] == ["Robot"]


async def test_public_categories_list(client, categories):
    response = await client.get("/api/v1/categories/demo-shop/categories")

    assert response.status_code == 200
    assert [category["name"] for category in response.json()] == ["Electronics", "Books", "Toys"]


async def test_admin_endpoints_require_token(client, categories):
    response = await client.get(f"{BASE}/products/form")

    assert response.status_code in (401, 403)


async def test_invalid_token_rejected(client, categories):
    response = await client.get(
        f"{BASE}/products/form", headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401


async def test_owner_cannot_manage_other_business(client, categories):
    token = create_access_token(data={"role": "owner", "business_slug": "other-shop"})

    response = await client.get(
        f"{BASE}/products/form", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 403


async def test_staff_role_rejected(client, categories):
    token = create_access_token(data={"role": "staff", "business_slug": "demo-shop"})

    response = await client.get(
        f"{BASE}/products/form", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 403


@pytest.mark.parametrize("password, expected_status", [("s3cret-pass", 200), ("wrong", 401)])
async def test_login(client, db, business, password, expected_status):
    db.add(User(username="manager", password_hash=get_password_hash("s3cret-pass"), role="superadmin"))
    await db.commit()

    response = await client.post(
        "/api/v1/admin/login", json={"username": "manager", "password": password}
    )

    assert response.status_code == expected_status
    if expected_status == 200:
        assert response.json()["access_token"]
