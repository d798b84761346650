"""
Tests for expense endpoints.
"""
from decimal import Decimal

from conftest import add_expense, participant_id


def test_create_expense(client, project):
    """Expense total is the sum of its items."""
    expense = add_expense(
        client, project, "Asha", "2025-01-10",
        [{"name": "Dinner", "price": 150, "quantity": 2}, {"name": "Water", "price": "20.5"}],
        note="Beach shack"
    )
    assert Decimal(expense["total"]) == Decimal("320.50")
    assert expense["payer_name"] == "Asha"
    assert expense["currency"] == "INR"
    assert expense["note"] == "Beach shack"
    assert [item["quantity"] for item in expense["items"]] == [2, 1]


def test_create_expense_requires_items(client, project):
    response = client.post(
        "/api/expenses",
        json={
            "project_id": project["id"],
            "payer_id": participant_id(project, "Asha"),
            "date": "2025-01-10",
            "items": []
        }
    )
    assert response.status_code == 422


def test_create_expense_rejects_non_positive_price(client, project):
    response = client.post(
        "/api/expenses",
        json={
            "project_id": project["id"],
            "payer_id": participant_id(project, "Asha"),
            "date": "2025-01-10",
            "items": [{"name": "Refund", "price": -5}]
        }
    )
    assert response.status_code == 422


def test_create_expense_payer_must_be_participant(client, project):
    """A participant of another project cannot pay here."""
    other = client.post(
        "/api/projects",
        json={"name": "Office lunch", "participants": ["Dev"]}
    ).json()

    response = client.post(
        "/api/expenses",
        json={
            "project_id": project["id"],
            "payer_id": participant_id(other, "Dev"),
            "date": "2025-01-10",
            "items": [{"name": "Snacks", "price": 10}]
        }
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Payer is not a participant of this project"


def test_create_expense_unknown_project(client, project):
    response = client.post(
        "/api/expenses",
        json={
            "project_id": 9999,
            "payer_id": participant_id(project, "Asha"),
            "date": "2025-01-10",
            "items": [{"name": "Snacks", "price": 10}]
        }
    )
    assert response.status_code == 404


def _seed(client, project):
    add_expense(client, project, "Asha", "2025-01-10", [{"name": "Dinner", "price": 300}])
    add_expense(client, project, "Bilal", "2025-01-12", [{"name": "Taxi", "price": 90}], note="Airport run")
    add_expense(client, project, "Asha", "2025-01-15", [{"name": "Scuba diving", "price": 600}])
    add_expense(client, project, "Chen", "2025-02-01", [{"name": "Groceries", "price": 45}])


def test_list_expenses_newest_first(client, project):
    _seed(client, project)
    response = client.get("/api/expenses", params={"project_id": project["id"]})
    assert response.status_code == 200
    data = response.json()
    assert [e["date"] for e in data["expenses"]] == ["2025-02-01", "2025-01-15", "2025-01-12", "2025-01-10"]
    assert data["pagination"] == {"page": 1, "page_size": 20, "total": 4, "total_pages": 1}


def test_list_expenses_pagination(client, project):
    _seed(client, project)
    response = client.get(
        "/api/expenses",
        params={"project_id": project["id"], "page": 2, "page_size": 3}
    )
    data = response.json()
    assert [e["date"] for e in data["expenses"]] == ["2025-01-10"]
    assert data["pagination"] == {"page": 2, "page_size": 3, "total": 4, "total_pages": 2}


def test_list_expenses_page_size_limit(client, project):
    response = client.get(
        "/api/expenses",
        params={"project_id": project["id"], "page_size": 500}
    )
    assert response.status_code == 422


def test_list_expenses_search(client, project):
    """Search matches item names and notes, ignoring case."""
    _seed(client, project)
    by_item = client.get("/api/expenses", params={"project_id": project["id"], "search": "SCUBA"}).json()
    assert [e["items"][0]["name"] for e in by_item["expenses"]] == ["Scuba diving"]

    by_note = client.get("/api/expenses", params={"project_id": project["id"], "search": "airport"}).json()
    assert [e["note"] for e in by_note["expenses"]] == ["Airport run"]


def test_list_expenses_filters(client, project):
    _seed(client, project)
    by_payer = client.get(
        "/api/expenses",
        params={"project_id": project["id"], "payer_id": participant_id(project, "Asha")}
    ).json()
    assert by_payer["pagination"]["total"] == 2

    by_dates = client.get(
        "/api/expenses",
        params={"project_id": project["id"], "start_date": "2025-01-11", "end_date": "2025-01-15"}
    ).json()
    assert [e["date"] for e in by_dates["expenses"]] == ["2025-01-15", "2025-01-12"]


def test_filters_do_not_change_settlement(client, project):
    """Balances always cover the whole ledger."""
    _seed(client, project)
    before = client.get(f"/api/settlement/{project['id']}").json()
    client.get("/api/expenses", params={"project_id": project["id"], "search": "taxi"})
    after = client.get(f"/api/settlement/{project['id']}").json()
    assert before == after
    assert Decimal(after["total_expenses"]) == Decimal("1035.00")


def test_delete_expense(client, project):
    expense = add_expense(client, project, "Asha", "2025-01-10", [{"name": "Dinner", "price": 300}])

    response = client.delete(f"/api/expenses/{expense['id']}", params={"project_id": project["id"]})
    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = client.delete(f"/api/expenses/{expense['id']}", params={"project_id": project["id"]})
    assert response.status_code == 404

    settlement = client.get(f"/api/settlement/{project['id']}").json()
    assert settlement["transfers"] == []
