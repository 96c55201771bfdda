"""API tests for financial entries, months and closings."""

from datetime import date

from fleetdesk.core.config import settings
from fleetdesk.core.permissions import CRUD_ACTIONS
from fleetdesk.models import Company
from tests.support import ApiTestCase

PREFIX = settings.API_V1_PREFIX


def _entry(entry_type: str, amount: float, **extra) -> dict:
    return {
        "description": f"Lançamento {entry_type}",
        "amount": amount,
        "category": "geral",
        "date": "10/06/2025",
        "type": entry_type,
        **extra,
    }


class FinancialTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        grants = [f"{m}.{a}" for m in ("financial", "months", "closings") for a in CRUD_ACTIONS]
        self.headers = self.caller("cfo@example.com", grants)

    def post(self, path: str, body: dict | None = None):
        return self.client.post(f"{PREFIX}{path}", headers=self.headers, json=body)

    def get(self, path: str, **params):
        return self.client.get(f"{PREFIX}{path}", headers=self.headers, params=params)


class TestFinancialSummary(FinancialTestCase):
    def test_requires_window(self) -> None:
        self.assertEqual(self.get("/financial/summary").status_code, 400)
        self.assertEqual(self.get("/financial/summary", start_date="2025-06-01").status_code, 400)

    def test_aggregates_window(self) -> None:
        for body in (_entry("entrada", 100), _entry("saida", 40), _entry("imposto", 10)):
            self.assertEqual(self.post("/financial", body).status_code, 201)
        self.post("/financial", _entry("entrada", 999, date="01/01/2024"))

        body = self.get("/financial/summary", start_date="2025-06-01", end_date="2025-06-30").json()
        self.assertEqual(body["entries"], 3)
        self.assertEqual(body["summary"]["balance"], 50)
        self.assertEqual(body["summary"]["profit_margin"], 50)

    def test_rejects_unknown_type_and_short_description(self) -> None:
        self.assertEqual(self.post("/financial", _entry("bonus", 10)).status_code, 400)
        self.assertEqual(self.post("/financial", {**_entry("entrada", 10), "description": "ab"}).status_code, 400)

    def test_filter_by_type(self) -> None:
        self.post("/financial", _entry("entrada", 1))
        self.post("/financial", _entry("saida", 2))
        types = [e["type"] for e in self.get("/financial", type="saida").json()]
        self.assertEqual(types, ["saida"])


class TestMonthsAndClosings(FinancialTestCase):
    def _month(self, year: int = 2025, month: int = 6) -> int:
        resp = self.post("/months", {"year": year, "month": month})
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["id"]

    def test_month_name_and_duplicate(self) -> None:
        month_id = self._month()
        self.assertEqual(self.get(f"/months/{month_id}").json()["name"], "Junho 2025")
        self.assertEqual(self.post("/months", {"year": 2025, "month": 6}).status_code, 409)
        self.assertEqual(self.post("/months", {"year": 2019, "month": 6}).status_code, 400)

    def test_closing_lifecycle(self) -> None:
        month_id = self._month()
        closing = self.post("/closings", {"month_id": month_id, "name": "Junho"})
        self.assertEqual(closing.status_code, 201, closing.text)
        closing_id = closing.json()["id"]

        for body in (_entry("entrada", 200), _entry("saida", 50), _entry("imposto", 30)):
            self.post("/financial", {**body, "closing_id": closing_id})

        closed = self.post(f"/closings/{closing_id}/close")
        self.assertEqual(closed.status_code, 200, closed.text)
        self.assertEqual(closed.json()["status"], "fechado")
        self.assertEqual(closed.json()["balance"], 120)
        self.assertEqual(closed.json()["profit_margin"], 60)

        self.assertEqual(self.post(f"/closings/{closing_id}/close").status_code, 400)
        self.assertEqual(self.post("/financial", _entry("entrada", 1, closing_id=closing_id)).status_code, 400)
        self.assertEqual(
            self.client.delete(f"{PREFIX}/closings/{closing_id}", headers=self.headers).status_code, 400
        )

        stats = self.get(f"/closings/{closing_id}/stats").json()
        self.assertEqual(stats["counts"], {"entries": 1, "expenses": 1, "taxes": 1, "total": 3})
        self.assertEqual(stats["totals"]["total_taxes"], 30)

        entries = self.get(f"/closings/{closing_id}/entries").json()["entries"]
        self.assertEqual(len(entries), 3)

        month_stats = self.get(f"/months/{month_id}/stats").json()["stats"]
        self.assertEqual(month_stats["closed_closings"], 1)
        self.assertEqual(month_stats["balance"], 120)

        self.assertEqual(
            self.client.delete(f"{PREFIX}/months/{month_id}", headers=self.headers).status_code, 400
        )

        reopened = self.post(f"/closings/{closing_id}/reopen")
        self.assertEqual(reopened.json()["status"], "aberto")
        self.assertEqual(self.post(f"/closings/{closing_id}/reopen").status_code, 400)

    def test_closing_requires_existing_month(self) -> None:
        self.assertEqual(self.post("/closings", {"month_id": 404, "name": "x"}).status_code, 404)

    def test_update_clears_optional_fields(self) -> None:
        with self.session() as db:
            company = Company(
                name="Transportes Sul",
                type="Cliente",
                cnpj="12.345.678/0001-90",
                date_registration=date(2025, 1, 2),
                responsible="Rita",
            )
            db.add(company)
            db.commit()
            company_id = company.id
        closing_id = self.post(
            "/closings",
            {
                "month_id": self._month(),
                "name": "Junho",
                "company_id": company_id,
                "start_date": "01/06/2025",
                "end_date": "30/06/2025",
            },
        ).json()["id"]

        resp = self.client.put(
            f"{PREFIX}/closings/{closing_id}",
            headers=self.headers,
            json={"company_id": None, "start_date": None, "end_date": None},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertIsNone(body["company_id"])
        self.assertIsNone(body["start_date"])
        self.assertIsNone(body["end_date"])
        self.assertEqual(body["name"], "Junho")

        refused = self.client.put(
            f"{PREFIX}/closings/{closing_id}", headers=self.headers, json={"name": None}
        )
        self.assertEqual(refused.status_code, 400)
        missing = self.client.put(
            f"{PREFIX}/closings/{closing_id}", headers=self.headers, json={"company_id": 999}
        )
        self.assertEqual(missing.status_code, 404)
