"""
HTTP API tests with dependency overrides
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from main import app, get_database_service
from models.exceptions import DatabaseError
from models.schemas import CategoryLabel, Transaction
from services.database_service import DatabaseService
from services.insight_service import InsightService, get_insight_service


HEADERS = {"X-User-Id": "user-1"}


@pytest.fixture
def db_mock(sample_transactions):
    db = MagicMock(spec=DatabaseService)
    db.get_records.return_value = sample_transactions
    db.get_all_records.return_value = sample_transactions
    db.get_records_by_type.side_effect = lambda user_id, type_: [t for t in sample_transactions if t.type == type_]
    db.get_monthly_budget.return_value = 0.0
    return db


@pytest.fixture
def client(db_mock, offline_service):
    app.dependency_overrides[get_database_service] = lambda: db_mock
    app.dependency_overrides[get_insight_service] = lambda: offline_service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestApi:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["ai"] == "fallback"

    def test_user_header_required(self, client):
        assert client.get("/records").status_code == 401

    def test_list_records(self, client, db_mock):
        response = client.get("/records", headers=HEADERS)

        assert response.status_code == 200
        assert len(response.json()) == 5
        db_mock.get_records.assert_awaited_once_with("user-1", limit=20)

    def test_create_record_with_category(self, client, db_mock, sample_transactions):
        db_mock.add_record.return_value = sample_transactions[1]

        response = client.post("/records", headers=HEADERS, json={
            "description": "Groceries", "amount": 12000, "category": "Food", "type": "expense",
        })

        assert response.status_code == 201
        user_id, record, category = db_mock.add_record.await_args.args
        assert user_id == "user-1"
        assert record.description == "Groceries"
        assert category == "Food"

    def test_create_record_classifies_missing_category(self, client, db_mock, sample_transactions):
        db_mock.add_record.return_value = sample_transactions[1]

        response = client.post("/records", headers=HEADERS, json={"description": "Something", "amount": 10})

        assert response.status_code == 201
        # no API key configured, so the classifier degrades to Other
        assert db_mock.add_record.await_args.args[2] == CategoryLabel.OTHER.value

    def test_create_record_validation(self, client):
        response = client.post("/records", headers=HEADERS, json={"description": "", "amount": -1})

        assert response.status_code == 422

    def test_delete_missing_record(self, client, db_mock):
        db_mock.delete_record.return_value = False

        assert client.delete("/records/nope", headers=HEADERS).status_code == 404

    def test_delete_record(self, client, db_mock):
        db_mock.delete_record.return_value = True

        assert client.delete("/records/1", headers=HEADERS).status_code == 204

    def test_income_stats(self, client):
        data = client.get("/stats/income", headers=HEADERS).json()

        assert data == {"total_income": 60000, "average_income": 30000, "income_count": 2}

    def test_expense_extremes(self, client):
        data = client.get("/stats/expenses/extremes", headers=HEADERS).json()

        assert data == {"best_expense": 12000, "worst_expense": 1500}

    def test_spending_record(self, client):
        data = client.get("/stats/spending", headers=HEADERS).json()

        assert data == {"total_expense": 21500, "days_with_records": 2}

    def test_category_stats(self, client):
        data = client.get("/stats/categories", headers=HEADERS).json()

        assert data[0] == {"category": "Food", "amount": 12000}

    def test_daily_stats(self, client):
        data = client.get("/stats/daily", headers=HEADERS).json()

        assert data[0]["date"] == "2025-09-28"

    def test_set_budget(self, client, db_mock):
        db_mock.set_monthly_budget.return_value = 30000

        response = client.put("/budget", headers=HEADERS, json={"monthly_budget": 30000})

        assert response.status_code == 200
        assert response.json()["monthly_budget"] == 30000
        db_mock.set_monthly_budget.assert_awaited_once_with("user-1", 30000)

    def test_set_budget_rejects_zero(self, client):
        assert client.put("/budget", headers=HEADERS, json={"monthly_budget": 0}).status_code == 422

    def test_insights_fallback(self, client, offline_service):
        data = client.get("/insights", headers=HEADERS).json()

        assert [i["id"] for i in data] == [i.id for i in offline_service.default_insights()]

    def test_categorize(self, client):
        response = client.post("/categorize", headers=HEADERS, json={"description": "Taxi to Thamel"})

        assert response.json() == {"category": "Other"}

    def test_ask(self, client):
        response = client.post("/ask", headers=HEADERS, json={"question": "Am I saving enough?"})

        assert response.status_code == 200
        assert "API key not configured" in response.json()["answer"]

    def test_ask_rejects_blank_question(self, client):
        assert client.post("/ask", headers=HEADERS, json={"question": "   "}).status_code == 422

    def test_database_error_maps_to_500(self, client, db_mock):
        db_mock.get_records.side_effect = DatabaseError("Error fetching records")

        response = client.get("/records", headers=HEADERS)

        assert response.status_code == 500
        assert response.json() == {"detail": "Database error"}

    def test_records_serialize(self, client):
        data = client.get("/records", headers=HEADERS).json()

        assert Transaction.model_validate(data[0]).description == "Monthly salary"


class TestAiEndpointsUseEveryRecord:
    """Insights and answers are computed over the whole history, not the recent page"""

    @pytest.fixture
    def history(self, sample_transactions):
        # more records than the recent-records page
        return sample_transactions * 6

    @pytest.fixture
    def spy_client(self, db_mock, history):
        db_mock.get_all_records.return_value = history
        spy = MagicMock(spec=InsightService)
        spy.generate_insights.return_value = []
        spy.answer_question.return_value = "You saved रू 231,000."
        app.dependency_overrides[get_database_service] = lambda: db_mock
        app.dependency_overrides[get_insight_service] = lambda: spy
        yield TestClient(app), spy
        app.dependency_overrides.clear()

    def test_insights_receive_full_history(self, spy_client, db_mock, history):
        client, spy = spy_client

        assert client.get("/insights", headers=HEADERS).status_code == 200

        db_mock.get_all_records.assert_awaited_once_with("user-1")
        db_mock.get_records.assert_not_awaited()
        assert spy.generate_insights.await_args.args[0] == history

    def test_ask_receives_full_history(self, spy_client, db_mock, history):
        client, spy = spy_client

        response = client.post("/ask", headers=HEADERS, json={"question": "How much have I saved?"})

        assert response.json() == {"answer": "You saved रू 231,000."}
        db_mock.get_records.assert_not_awaited()
        question, records = spy.answer_question.await_args.args
        assert question == "How much have I saved?"
        assert len(records) == 30
