"""
==============================================================================
API Integration Tests
==============================================================================

Tests for REST API endpoints.

==============================================================================
"""

import pytest
from fastapi.testclient import TestClient

from app.db.models import Product


def create_product(client: TestClient, category_id: int = 1, **payload):
    """POST a product and return the response."""
    payload.setdefault("name", "Widget")
    return client.post(f"/api/v1/products?category={category_id}", json=payload)


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test health check returns status."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] in ["healthy", "degraded"]
        assert data["details"]["duplicate_match_mode"] == "exact"

    def test_health_reports_catalog_counts(self, client: TestClient, category):
        """Test health check counts catalog rows."""
        response = client.get("/api/v1/health")
        assert response.json()["details"]["catalog"]["categories"] == 1

    def test_readiness_probe(self, client: TestClient):
        """Test readiness probe."""
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_liveness_probe(self, client: TestClient):
        """Test liveness probe."""
        response = client.get("/api/v1/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True


class TestCategoryEndpoints:
    """Tests for category endpoints."""

    def test_create_category(self, client: TestClient):
        """Test creating a category."""
        response = client.post(
            "/api/v1/categories",
            json={"name": "  Shirts ", "description": "Tops"}
        )
        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["category"]["name"] == "Shirts"

    def test_create_duplicate_category(self, client: TestClient, category):
        """Test creating a category with a taken name."""
        response = client.post("/api/v1/categories", json={"name": category.name})
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CATEGORY_EXISTS"

    def test_list_categories(self, client: TestClient, category, other_category):
        """Test listing categories ordered by name."""
        response = client.get("/api/v1/categories")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [c["name"] for c in data["categories"]] == ["Gadgets", "Widgets"]

    def test_category_choices(self, client: TestClient, category, other_category):
        """Test the {id: name} selection list."""
        response = client.get("/api/v1/categories/choices")
        assert response.status_code == 200
        assert response.json()["choices"] == {"1": "Widgets", "2": "Gadgets"}

    def test_get_category_not_found(self, client: TestClient):
        """Test getting a nonexistent category."""
        response = client.get("/api/v1/categories/99999")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CATEGORY_NOT_FOUND"


class TestVariationEndpoints:
    """Tests for variation set endpoints."""

    def test_create_variation_set(self, client: TestClient):
        """Test creating a set with attributes."""
        response = client.post(
            "/api/v1/variation-sets",
            json={"name": "Color", "attributes": ["Red", "Blue"]}
        )
        assert response.status_code == 201
        data = response.json()["variation_set"]
        assert data["name"] == "Color"
        assert sorted(a["name"] for a in data["attributes"]) == ["Blue", "Red"]

    def test_create_variation_set_duplicate_attributes(self, client: TestClient):
        """Test duplicate attribute names are rejected."""
        response = client.post(
            "/api/v1/variation-sets",
            json={"name": "Color", "attributes": ["Red", "red"]}
        )
        assert response.status_code == 422

    def test_create_duplicate_variation_set(self, client: TestClient, variation_sets):
        """Test creating a set with a taken name."""
        response = client.post("/api/v1/variation-sets", json={"name": "Color"})
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "VARIATION_SET_EXISTS"

    def test_list_variation_sets(self, client: TestClient, variation_sets):
        """Test listing sets."""
        response = client.get("/api/v1/variation-sets")
        assert response.status_code == 200
        assert response.json()["total"] == 3

    def test_add_attribute(self, client: TestClient, variation_sets):
        """Test adding an attribute to a set."""
        response = client.post(
            "/api/v1/variation-sets/1/attributes",
            json={"name": "Green"}
        )
        assert response.status_code == 201
        data = response.json()["attribute"]
        assert data["variation_set_id"] == 1
        assert data["name"] == "Green"

        response = client.get("/api/v1/variation-sets/1")
        names = [a["name"] for a in response.json()["variation_set"]["attributes"]]
        assert "Green" in names

    def test_add_existing_attribute(self, client: TestClient, variation_sets):
        """Test adding an attribute name the set already has."""
        response = client.post(
            "/api/v1/variation-sets/1/attributes",
            json={"name": "RED"}
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "VARIATION_ATTRIBUTE_EXISTS"

    def test_add_attribute_unknown_set(self, client: TestClient):
        """Test adding an attribute to a nonexistent set."""
        response = client.post(
            "/api/v1/variation-sets/99999/attributes",
            json={"name": "Green"}
        )
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "VARIATION_SET_NOT_FOUND"


class TestProductCreate:
    """Tests for product creation."""

    def test_create_product(self, client: TestClient, category, variation_sets):
        """Test creating a product with variations."""
        response = create_product(
            client,
            name="Widget",
            price="9.99",
            variations={"1": 10, "2": 20}
        )
        assert response.status_code == 201
        product = response.json()["product"]
        assert product["name"] == "Widget"
        assert product["category_id"] == 1
        assert product["price"] == 9.99
        assert product["variation_selections"] == {"1": 10, "2": 20}

    def test_create_product_drops_empty_choices(self, client: TestClient, category, variation_sets):
        """Test unselected variation sets are ignored."""
        response = create_product(client, variations={"1": 10, "2": None, "3": 0})
        assert response.status_code == 201
        assert response.json()["product"]["variation_selections"] == {"1": 10}

    def test_create_duplicate_product(self, client: TestClient, category, variation_sets):
        """Test an equivalent product is refused."""
        first = create_product(client, variations={"1": 10, "2": 20})
        assert first.status_code == 201

        response = create_product(client, variations={"2": 20, "1": 10})
        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "PRODUCT_EXISTS"
        assert error["details"]["existing_product_id"] == first.json()["product"]["id"]

    def test_create_same_name_different_variations(self, client: TestClient, category, variation_sets):
        """Test the same name with other variations is allowed."""
        assert create_product(client, variations={"1": 10}).status_code == 201
        assert create_product(client, variations={"1": 11}).status_code == 201
        assert create_product(client, variations={"1": 10, "2": 20}).status_code == 201

    def test_create_without_variations_twice(self, client: TestClient, category):
        """Test a plain product cannot be created twice."""
        assert create_product(client).status_code == 201
        response = create_product(client)
        assert response.status_code == 409

    def test_create_unknown_category(self, client: TestClient):
        """Test creating a product in a nonexistent category."""
        response = create_product(client, category_id=99999)
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CATEGORY_NOT_FOUND"

    def test_create_without_category(self, client: TestClient):
        """Test the category query parameter is required."""
        response = client.post("/api/v1/products", json={"name": "Widget"})
        assert response.status_code == 422

    def test_create_without_name(self, client: TestClient, category):
        """Test a blank name is a validation error."""
        response = create_product(client, name="   ")
        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]["errors"][0]["field"] == "name"

    def test_create_negative_price(self, client: TestClient, category):
        """Test a negative price is a validation error."""
        response = create_product(client, price="-1")
        assert response.status_code == 422
        fields = [e["field"] for e in response.json()["error"]["details"]["errors"]]
        assert fields == ["price"]

    def test_create_attribute_from_wrong_set(self, client: TestClient, category, variation_sets):
        """Test an attribute keyed under another set is rejected."""
        response = create_product(client, variations={"1": 20})
        assert response.status_code == 422
        fields = [e["field"] for e in response.json()["error"]["details"]["errors"]]
        assert fields == ["variations.1"]

    def test_create_unknown_attribute(self, client: TestClient, category, variation_sets):
        """Test a nonexistent attribute is rejected."""
        response = create_product(client, variations={"1": 99999})
        assert response.status_code == 422


class TestProductRead:
    """Tests for product lookup and search."""

    def test_get_product(self, client: TestClient, make_product):
        """Test getting a product by ID."""
        product: Product = make_product(variations={1: 10})
        response = client.get(f"/api/v1/products/{product.id}")
        assert response.status_code == 200
        data = response.json()["product"]
        assert data["variation_attributes"][0]["name"] == "Red"

    def test_get_product_not_found(self, client: TestClient):
        """Test getting a nonexistent product."""
        response = client.get("/api/v1/products/99999")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PRODUCT_NOT_FOUND"

    def test_list_products(self, client: TestClient, make_product):
        """Test listing products with pagination."""
        make_product(name="Widget")
        make_product(name="Gizmo")
        make_product(name="Widget Pro")

        response = client.get("/api/v1/products?page=1&page_size=2")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["pages"] == 2
        assert len(data["items"]) == 2

    def test_search_by_name(self, client: TestClient, make_product):
        """Test name substring search."""
        make_product(name="Widget")
        make_product(name="Gizmo")

        response = client.get("/api/v1/products?name=widg")
        names = [p["name"] for p in response.json()["items"]]
        assert names == ["Widget"]

    def test_search_by_variation_attribute(self, client: TestClient, make_product):
        """Test filtering by a linked attribute."""
        red = make_product(name="Widget", variations={1: 10})
        make_product(name="Widget", variations={1: 11})

        response = client.get("/api/v1/products?variation_attribute_id=10")
        ids = [p["id"] for p in response.json()["items"]]
        assert ids == [red.id]


class TestProductUpdate:
    """Tests for product updates."""

    def test_update_fields(self, client: TestClient, make_product):
        """Test updating plain fields keeps the variations."""
        product = make_product(variations={1: 10})
        response = client.put(
            f"/api/v1/products/{product.id}",
            json={"description": "Blue widget", "price": "4.50"}
        )
        assert response.status_code == 200
        data = response.json()["product"]
        assert data["description"] == "Blue widget"
        assert data["price"] == 4.5
        assert data["variation_selections"] == {"1": 10}

    def test_update_replaces_variations(self, client: TestClient, make_product):
        """Test sent variations replace the old selection."""
        product = make_product(variations={1: 10, 2: 20})
        response = client.put(
            f"/api/v1/products/{product.id}",
            json={"variations": {"1": 11}}
        )
        assert response.status_code == 200
        assert response.json()["product"]["variation_selections"] == {"1": 11}

    def test_update_clears_variations(self, client: TestClient, make_product):
        """Test an empty selection removes every link."""
        product = make_product(variations={1: 10})
        response = client.put(f"/api/v1/products/{product.id}", json={"variations": {}})
        assert response.status_code == 200
        assert response.json()["product"]["variation_attributes"] == []

    def test_resave_unchanged_product(self, client: TestClient, make_product):
        """Test saving a product without changes is not a conflict."""
        product = make_product(variations={1: 10, 2: 20})
        response = client.put(
            f"/api/v1/products/{product.id}",
            json={"name": "Widget", "variations": {"1": 10, "2": 20}}
        )
        assert response.status_code == 200

    def test_update_into_duplicate(self, client: TestClient, make_product):
        """Test an update matching another product is refused."""
        red = make_product(variations={1: 10})
        blue = make_product(variations={1: 11})

        response = client.put(
            f"/api/v1/products/{blue.id}",
            json={"variations": {"1": 10}}
        )
        assert response.status_code == 409
        assert response.json()["error"]["details"]["existing_product_id"] == red.id

        # Refused update leaves the product unchanged
        response = client.get(f"/api/v1/products/{blue.id}")
        assert response.json()["product"]["variation_selections"] == {"1": 11}

    def test_move_to_unknown_category(self, client: TestClient, make_product):
        """Test moving a product to a nonexistent category."""
        product = make_product()
        response = client.put(f"/api/v1/products/{product.id}", json={"category_id": 99999})
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CATEGORY_NOT_FOUND"

    def test_update_not_found(self, client: TestClient):
        """Test updating a nonexistent product."""
        response = client.put("/api/v1/products/99999", json={"name": "Widget"})
        assert response.status_code == 404


class TestProductDelete:
    """Tests for product deletion."""

    def test_delete_product(self, client: TestClient, make_product):
        """Test deleting a product frees its name and variations."""
        product = make_product(variations={1: 10})

        response = client.delete(f"/api/v1/products/{product.id}")
        assert response.status_code == 200
        assert "Widget" in response.json()["message"]

        assert client.get(f"/api/v1/products/{product.id}").status_code == 404
        assert create_product(client, variations={"1": 10}).status_code == 201

    def test_delete_not_found(self, client: TestClient):
        """Test deleting a nonexistent product."""
        response = client.delete("/api/v1/products/99999")
        assert response.status_code == 404


class TestDuplicateCheckEndpoint:
    """Tests for the dry-run duplicate check."""

    def test_check_reports_conflict(self, client: TestClient, make_product):
        """Test an existing equivalent product is reported."""
        product = make_product(variations={1: 10, 2: 20})
        response = client.post(
            "/api/v1/products/check-duplicate",
            json={"name": "Widget", "category_id": 1, "variations": {"2": 20, "1": 10}}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["exists"] is True
        assert data["existing_product_id"] == product.id
        assert data["match_mode"] == "exact"

    def test_check_excludes_self(self, client: TestClient, make_product):
        """Test the excluded product is not reported."""
        product = make_product(variations={1: 10})
        response = client.post(
            "/api/v1/products/check-duplicate",
            json={
                "name": "Widget",
                "category_id": 1,
                "variations": {"1": 10},
                "exclude_id": product.id,
            }
        )
        assert response.json()["exists"] is False

    @pytest.mark.parametrize("variations", [{}, {"1": 10}, {"1": 10, "2": 21}])
    def test_check_no_conflict(self, client: TestClient, make_product, variations):
        """Test non-equivalent candidates are not reported."""
        make_product(variations={1: 10, 2: 20})
        response = client.post(
            "/api/v1/products/check-duplicate",
            json={"name": "Widget", "category_id": 1, "variations": variations}
        )
        data = response.json()
        assert data["exists"] is False
        assert data["existing_product_id"] is None

    def test_check_unknown_category(self, client: TestClient):
        """Test checking against a nonexistent category."""
        response = client.post(
            "/api/v1/products/check-duplicate",
            json={"name": "Widget", "category_id": 99999}
        )
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CATEGORY_NOT_FOUND"

    def test_check_attribute_from_wrong_set(self, client: TestClient, category, variation_sets):
        """Test an attribute keyed under another set is rejected."""
        response = client.post(
            "/api/v1/products/check-duplicate",
            json={"name": "Widget", "category_id": 1, "variations": {"2": 10}}
        )
        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert [e["field"] for e in error["details"]["errors"]] == ["variations.2"]

    def test_check_blank_name(self, client: TestClient, category):
        """Test a whitespace-only name is a validation error."""
        response = client.post(
            "/api/v1/products/check-duplicate",
            json={"name": "   ", "category_id": 1}
        )
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
