# Analytics tests:
# - summary, charts and ranking built from stock_out logs
# - admin-only transactions and CSV export
from datetime import timedelta

import pytest

from stockdesk.utils.time_utils import utcnow

pytestmark = pytest.mark.analytics


def _start_of_last_wednesday():
    now = utcnow()
    days_back = (now.weekday() - 2) % 7
    return (now - timedelta(days=days_back)).replace(hour=0, minute=0, second=0, microsecond=0)


class TestAnalytics:

    def test_empty_store(self, client, staff_headers):
        response = client.get("/analytics", headers=staff_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["summary"] == {
            "totalRevenue": 0, "totalOrders": 0, "averageOrderValue": 0,
            "topSellingProduct": "N/A", "lowStockItems": 0, "revenueGrowth": 0,
        }
        assert body["revenueChart"]["data"] == [0] * 7
        assert body["categoryChart"] == {"labels": [], "data": []}
        assert body["topProducts"] == []
        assert body["recentTransactions"] == []

    def test_week_chart_groups_wednesday_sales(self, client, admin_headers, catalog, make_sale):
        wednesday = _start_of_last_wednesday()
        # price 25: 2 units = 50, 3 units = 75
        make_sale(catalog["laptop"], quantity=2, order_number=1001, when=wednesday)
        make_sale(catalog["laptop"], quantity=3, order_number=1002, when=wednesday)

        body = client.get("/analytics?period=7days", headers=admin_headers).json()
        assert body["revenueChart"]["labels"][2] == "Wed"
        assert body["revenueChart"]["data"] == [0, 0, 125, 0, 0, 0, 0]

    def test_summary_and_ranking(self, client, admin_headers, catalog, customer, make_sale):
        make_sale(catalog["phone"], quantity=2, order_number=1001, customer=customer)
        make_sale(catalog["laptop"], quantity=1, order_number=1002, structured=True)
        make_sale(catalog["cable"], details="legacy import")
        # outside the 7 day window, inside the previous one
        make_sale(catalog["phone"], quantity=1, order_number=900, when=utcnow() - timedelta(days=10))

        body = client.get("/analytics", headers=admin_headers).json()
        summary = body["summary"]
        assert summary["totalRevenue"] == 230
        assert summary["totalOrders"] == 3
        assert summary["averageOrderValue"] == pytest.approx(230 / 3)
        assert summary["topSellingProduct"] == "Acme Phone"
        # phone (5) and cable (3) are below the threshold of 10
        assert summary["lowStockItems"] == 2
        assert summary["revenueGrowth"] == 130.0

        assert [p["name"] for p in body["topProducts"]] == ["Acme Phone", "Acme Laptop", "USB Cable"]
        assert body["topProducts"][0] == {"name": "Acme Phone", "sales": 2, "revenue": 200, "trend": "up"}

        # three items, one uncategorized
        chart = dict(zip(body["categoryChart"]["labels"], body["categoryChart"]["data"]))
        assert chart == {"Phones": 33, "Laptops": 33}

        transactions = body["recentTransactions"]
        assert len(transactions) == 3
        phone_tx = next(t for t in transactions if t["product"] == "Acme Phone")
        assert phone_tx["id"] == "TRX-1001"
        assert phone_tx["customer"] == "Jane Doe"
        assert phone_tx["amount"] == 200
        cable_tx = next(t for t in transactions if t["product"] == "USB Cable")
        assert cable_tx["id"].startswith("TRX-") and len(cable_tx["id"]) == 10

    def test_staff_gets_no_transactions(self, client, staff_headers, catalog, make_sale):
        make_sale(catalog["phone"])
        body = client.get("/analytics", headers=staff_headers).json()
        assert body["summary"]["totalOrders"] == 1
        assert body["recentTransactions"] == []

    def test_thirty_days_chart(self, client, admin_headers, catalog, make_sale):
        make_sale(catalog["cable"], quantity=1, when=utcnow() - timedelta(days=1))
        make_sale(catalog["cable"], quantity=2, when=utcnow() - timedelta(days=15))
        body = client.get("/analytics?period=30days", headers=admin_headers).json()
        assert body["revenueChart"]["labels"] == ["Week 1", "Week 2", "Week 3", "Week 4"]
        assert body["revenueChart"]["data"] == [0, 10, 0, 5]

    def test_invalid_period(self, client, admin_headers):
        response = client.get("/analytics?period=1year", headers=admin_headers)
        assert response.status_code == 400
        assert "error" in response.json()

    def test_requires_token(self, client):
        assert client.get("/analytics").status_code == 401


class TestAnalyticsExport:

    def test_csv(self, client, admin_headers, catalog, make_sale):
        make_sale(catalog["phone"], quantity=2, order_number=1042)
        make_sale(catalog["cable"], quantity=1, order_number=1043)
        response = client.get("/analytics/export?period=30days", headers=admin_headers)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "sales-report-30days-" in response.headers["content-disposition"]

        lines = response.text.strip().split("\n")
        assert lines[0] == "Date,Product,Brand,Category,Quantity,Unit Price,Total,Order ID"
        rows = {line.split(",")[1]: line.split(",") for line in lines[1:]}
        assert rows["Acme Phone"][2:] == ["Acme", "Phones", "2", "100.0", "200.0", "#1042"]
        assert rows["USB Cable"][2:4] == ["N/A", "N/A"]

    def test_error_is_json(self, client, admin_headers):
        response = client.get("/analytics/export?period=forever", headers=admin_headers)
        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/json")
