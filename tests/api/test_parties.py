"""
Tests for customer and supplier endpoints.
"""

from decimal import Decimal


class TestCreateParty:

    def test_create_customer_returns_201(self, client):
        response = client.post("/customers", json={"name": "Ravi Traders"})
        assert response.status_code == 201

    def test_create_customer_with_opening_balance(self, client):
        response = client.post("/customers", json={
            "name": "Ravi Traders",
            "mobile_no": "9800011122",
            "opening_balance": "1500.00",
            "opening_date": "2026-01-01",
        })
        data = response.json()
        assert data["name"] == "Ravi Traders"
        assert Decimal(data["current_balance"]) == Decimal("1500")

    def test_create_supplier_returns_201(self, client):
        response = client.post("/suppliers", json={
            "name": "Bharat Mills",
            "opening_balance": "-250",
        })
        assert response.status_code == 201
        assert Decimal(response.json()["current_balance"]) == Decimal("-250")

    def test_blank_name_returns_422(self, client):
        response = client.post("/customers", json={"name": ""})
        assert response.status_code == 422


class TestGetParty:

    def test_get_customer(self, client):
        created = client.post("/customers", json={"name": "Ravi Traders"}).json()
        response = client.get(f"/customers/{created['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == "Ravi Traders"

    def test_get_missing_supplier_returns_404(self, client):
        response = client.get("/suppliers/999")
        assert response.status_code == 404

    def test_list_is_per_party_type(self, client):
        client.post("/customers", json={"name": "Buyer"})
        client.post("/suppliers", json={"name": "Seller"})

        customers = client.get("/customers").json()
        suppliers = client.get("/suppliers").json()
        assert [c["name"] for c in customers] == ["Buyer"]
        assert [s["name"] for s in suppliers] == ["Seller"]
