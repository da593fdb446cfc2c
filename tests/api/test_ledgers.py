"""
Tests for ledger API endpoints.

These test the HTTP layer: query parameters, filtering, pagination
and error mapping. Reconciliation itself is tested in
test_reconciliation_service.py.
"""

from decimal import Decimal


def seed_customer(client):
    """Helper: customer with invoice 1000, invoice 200, payment 400."""
    customer_id = client.post("/customers", json={"name": "Ravi Traders"}).json()["id"]
    for kind, ref, day, amount in (
        ("sales-invoices", "INV-001", "2026-02-03", "1000"),
        ("payments-in", "RCPT-001", "2026-02-05", "400"),
        ("sales-invoices", "INV-002", "2026-02-04", "200"),
    ):
        client.post(f"/transactions/{kind}", json={
            "party_id": customer_id,
            "reference_no": ref,
            "transaction_date": day,
            "amount": amount,
        })
    return customer_id


class TestStatement:

    def test_statement_newest_first(self, client):
        customer_id = seed_customer(client)

        response = client.get("/ledgers/customer", params={"account": customer_id})
        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "journal"
        assert data["account"] == customer_id
        assert [e["reference_no"] for e in data["entries"]] == [
            "RCPT-001", "INV-002", "INV-001",
        ]
        assert [Decimal(e["balance"]) for e in data["entries"]] == [
            Decimal("800"), Decimal("1200"), Decimal("1000"),
        ]
        assert Decimal(data["totals"]["outstanding"]) == Decimal("800")

    def test_all_accounts_by_default(self, client):
        seed_customer(client)
        data = client.get("/ledgers/customer").json()
        assert data["account"] == "all"
        assert data["total_entries"] == 3

    def test_date_range_keeps_true_balances(self, client):
        customer_id = seed_customer(client)

        data = client.get("/ledgers/customer", params={
            "account": customer_id,
            "start_date": "2026-02-04",
        }).json()

        assert [Decimal(e["balance"]) for e in data["entries"]] == [
            Decimal("800"), Decimal("1200"),
        ]
        assert Decimal(data["totals"]["total_debit"]) == Decimal("200")

    def test_search_and_side_filters_do_not_change_totals(self, client):
        customer_id = seed_customer(client)

        data = client.get("/ledgers/customer", params={
            "account": customer_id,
            "side": "credit",
        }).json()

        assert [e["reference_no"] for e in data["entries"]] == ["RCPT-001"]
        assert Decimal(data["entries"][0]["balance"]) == Decimal("800")
        assert data["totals"]["entry_count"] == 3

        found = client.get("/ledgers/customer", params={"search": "inv-002"}).json()
        assert [e["reference_no"] for e in found["entries"]] == ["INV-002"]

    def test_kind_filter(self, client):
        seed_customer(client)
        data = client.get("/ledgers/customer", params={"kind": "payment"}).json()
        assert [e["kind"] for e in data["entries"]] == ["payment"]

    def test_pagination(self, client):
        seed_customer(client)

        data = client.get("/ledgers/customer", params={
            "page": 2, "page_size": 2,
        }).json()

        assert data["page"] == 2
        assert data["total_pages"] == 2
        assert [e["reference_no"] for e in data["entries"]] == ["INV-001"]

    def test_supplier_statement(self, client):
        supplier_id = client.post("/suppliers", json={"name": "Bharat Mills"}).json()["id"]
        client.post("/transactions/purchase-orders", json={
            "party_id": supplier_id,
            "reference_no": "PO-001",
            "transaction_date": "2026-02-01",
            "amount": "900",
        })

        data = client.get("/ledgers/supplier", params={"account": supplier_id}).json()
        assert Decimal(data["entries"][0]["credit"]) == Decimal("900")
        assert Decimal(data["totals"]["outstanding"]) == Decimal("900")

    def test_supplier_outstanding_filter_shows_payables(self, client):
        supplier_id = client.post("/suppliers", json={"name": "Bharat Mills"}).json()["id"]
        for kind, ref, day, amount in (
            ("purchase-orders", "PO-001", "2026-02-01", "900"),
            ("payments-out", "PAY-001", "2026-02-02", "300"),
        ):
            client.post(f"/transactions/{kind}", json={
                "party_id": supplier_id,
                "reference_no": ref,
                "transaction_date": day,
                "amount": amount,
            })

        data = client.get("/ledgers/supplier", params={
            "account": supplier_id,
            "side": "outstanding",
        }).json()

        assert [e["reference_no"] for e in data["entries"]] == ["PAY-001", "PO-001"]
        assert Decimal(data["totals"]["outstanding"]) == Decimal("600")

    def test_fallback_when_journal_missing(self, client, drop_journals):
        customer_id = seed_customer(client)
        drop_journals()

        data = client.get("/ledgers/customer", params={"account": customer_id}).json()
        assert data["source"] == "derived"
        assert [Decimal(e["balance"]) for e in data["entries"]] == [
            Decimal("800"), Decimal("1200"), Decimal("1000"),
        ]


class TestStatementErrors:

    def test_unknown_party_type_returns_422(self, client):
        response = client.get("/ledgers/vendor")
        assert response.status_code == 422

    def test_bad_account_returns_400(self, client):
        response = client.get("/ledgers/customer", params={"account": "abc"})
        assert response.status_code == 400

    def test_missing_account_returns_404(self, client):
        response = client.get("/ledgers/customer", params={"account": 999})
        assert response.status_code == 404

    def test_inverted_date_range_returns_400(self, client):
        response = client.get("/ledgers/customer", params={
            "start_date": "2026-03-01",
            "end_date": "2026-02-01",
        })
        assert response.status_code == 400


class TestPostEntry:

    def test_manual_entry_returns_201(self, client):
        customer_id = client.post("/customers", json={"name": "Ravi"}).json()["id"]

        response = client.post(f"/ledgers/customer/{customer_id}/entries", json={
            "kind": "sale_order",
            "transaction_date": "2026-02-01",
            "debit": "350",
            "reference_no": "SO-001",
        })

        assert response.status_code == 201
        assert Decimal(response.json()["balance"]) == Decimal("350")

    def test_both_sides_returns_422(self, client):
        customer_id = client.post("/customers", json={"name": "Ravi"}).json()["id"]

        response = client.post(f"/ledgers/customer/{customer_id}/entries", json={
            "kind": "sale_order",
            "transaction_date": "2026-02-01",
            "debit": "10",
            "credit": "10",
        })
        assert response.status_code == 422

    def test_missing_party_returns_404(self, client):
        response = client.post("/ledgers/supplier/5/entries", json={
            "kind": "po",
            "transaction_date": "2026-02-01",
            "credit": "10",
        })
        assert response.status_code == 404

    def test_recompute(self, client):
        customer_id = seed_customer(client)
        response = client.post(f"/ledgers/customer/{customer_id}/recompute")
        assert response.status_code == 200
        assert Decimal(response.json()["current_balance"]) == Decimal("800")
