"""
Integration tests for admin listings

Every route under /admin needs a valid token and the admin role.
"""

from decimal import Decimal

import pytest

from app.crud import transaction as crud_transaction
from app.crud.transaction import PAGE_SIZE


@pytest.fixture
def many_transactions(db_session, seeded_users):
    """PAGE_SIZE + 2 transactions on jonas's account, numbered in insert order"""
    for number in range(PAGE_SIZE + 2):
        crud_transaction.create(db_session, {
            "slug": f"tx-seed-{number}",
            "user_id": seeded_users.jonas.id,
            "account_id": seeded_users.jonas_account.id,
            "payment_method_id": 1,
            "transaction_type": "income",
            "category": "laun",
            "amount": Decimal("100.00"),
            "description": f"Payment {number}",
        })


@pytest.mark.integration
class TestAdminUsers:
    """Test GET /admin/users"""

    def test_lists_all_users(self, test_client, admin_headers):
        response = test_client.get("/admin/users", headers=admin_headers)

        assert response.status_code == 200
        users = response.json()
        assert {user["username"] for user in users} == {"admin", "jonas", "katrin"}
        for user in users:
            assert "password_hash" not in user
            assert "password" not in user

    def test_non_admin_forbidden(self, test_client, katrin_headers):
        response = test_client.get("/admin/users", headers=katrin_headers)

        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden: Administrator access required"}


@pytest.mark.integration
class TestAdminAccounts:
    """Test GET /admin/accounts"""

    def test_accounts_carry_owner(self, test_client, seeded_users, admin_headers):
        response = test_client.get("/admin/accounts", headers=admin_headers)

        assert response.status_code == 200
        owners = {account["slug"]: account["owner_username"] for account in response.json()}
        assert owners == {
            "account_admin": "admin",
            "account_jonas": "jonas",
            "account_katrin": "katrin",
        }

    def test_non_admin_forbidden(self, test_client, jonas_headers):
        response = test_client.get("/admin/accounts", headers=jonas_headers)

        assert response.status_code == 403


@pytest.mark.integration
class TestAdminTransactions:
    """Test GET /admin/transactions paging"""

    def test_first_page_is_newest(self, test_client, many_transactions, admin_headers):
        response = test_client.get("/admin/transactions", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert len(data) == PAGE_SIZE
        assert data[0]["slug"] == f"tx-seed-{PAGE_SIZE + 1}"

    def test_second_page(self, test_client, many_transactions, admin_headers):
        response = test_client.get("/admin/transactions?page=1", headers=admin_headers)

        assert response.status_code == 200
        assert [tx["slug"] for tx in response.json()] == ["tx-seed-1", "tx-seed-0"]

    def test_page_past_the_end(self, test_client, many_transactions, admin_headers):
        response = test_client.get("/admin/transactions?page=5", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == []

    def test_negative_page(self, test_client, admin_headers):
        response = test_client.get("/admin/transactions?page=-1", headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid page query parameter"}

    def test_non_numeric_page(self, test_client, admin_headers):
        response = test_client.get("/admin/transactions?page=abc", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "query.page"

    def test_non_admin_forbidden(self, test_client, jonas_headers):
        response = test_client.get("/admin/transactions", headers=jonas_headers)

        assert response.status_code == 403
