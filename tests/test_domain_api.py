"""API tests for the fleet CRUD routes: uniqueness, referential refusals, trips and validation."""

from fleetdesk.core.config import settings
from fleetdesk.core.permissions import CRUD_ACTIONS
from tests.support import ApiTestCase

PREFIX = settings.API_V1_PREFIX


def _grants(*modules: str) -> list[str]:
    return [f"{m}.{a}" for m in modules for a in CRUD_ACTIONS]


COMPANY = {
    "name": "Transportes Sul",
    "type": "Cliente",
    "cnpj": "12.345.678/0001-90",
    "date_registration": "15/01/2024",
    "status": "Ativo",
    "responsible": "Marta",
    "commission": 5,
}

TRUCK = {
    "name": "Scania 01",
    "plate": "abc1d23",
    "brand": "Scania",
    "year": 2019,
    "doc_expiry": "2026-12-31",
    "renavam": "00998877665",
}


class DomainTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.headers = self.caller(
            "ops@example.com",
            _grants("companies", "employees", "trucks", "maintenance", "trips", "tripExpenses", "loads"),
        )

    def post(self, path: str, body: dict):
        return self.client.post(f"{PREFIX}{path}", headers=self.headers, json=body)


class TestCompanies(DomainTestCase):
    def test_duplicate_cnpj_is_refused(self) -> None:
        self.assertEqual(self.post("/companies", COMPANY).status_code, 201)
        dup = self.post("/companies", {**COMPANY, "name": "Outra"})
        self.assertEqual(dup.status_code, 400)

    def test_company_with_loads_cannot_be_deleted(self) -> None:
        company_id = self.post("/companies", COMPANY).json()["id"]
        load = {
            "company_id": company_id,
            "date": "02/02/2025",
            "loading_number": "L-001",
            "deliveries": 3,
            "cargo_weight": 1200.5,
            "total_value": 9000,
            "freight4": 100,
            "total_freight": 700,
            "closings": 0,
        }
        self.assertEqual(self.post("/loads", load).status_code, 201)
        self.assertEqual(self.post("/loads", load).status_code, 400)

        resp = self.client.delete(f"{PREFIX}/companies/{company_id}", headers=self.headers)
        self.assertEqual(resp.status_code, 400)

        by_company = self.client.get(f"{PREFIX}/loads/company/{company_id}", headers=self.headers)
        self.assertEqual(len(by_company.json()), 1)
        missing = self.client.get(f"{PREFIX}/loads/company/9999", headers=self.headers)
        self.assertEqual(missing.status_code, 404)

    def test_unknown_company(self) -> None:
        resp = self.client.get(f"{PREFIX}/companies/404", headers=self.headers)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"message": "company not found"})

    def test_invalid_date_is_invalid_data(self) -> None:
        resp = self.post("/companies", {**COMPANY, "date_registration": "31/02/2024"})
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["message"], "invalid data")
        self.assertEqual(body["errors"][0]["field"], "date_registration")


class TestEmployees(DomainTestCase):
    def test_transactions_and_search(self) -> None:
        employee = {"name": "João Lima", "job_title": "Motorista", "base_salary": 3200, "status": "Ativo"}
        created = self.post("/employees", employee)
        self.assertEqual(created.status_code, 201, created.text)
        employee_id = created.json()["id"]
        self.assertIsNotNone(created.json()["hire_date"])

        tx = self.post(f"/employees/{employee_id}/transactions", {"type": "Crédito", "amount": 150})
        self.assertEqual(tx.status_code, 201, tx.text)
        negative = self.post(f"/employees/{employee_id}/transactions", {"type": "Débito", "amount": -1})
        self.assertEqual(negative.status_code, 400)

        detail = self.client.get(f"{PREFIX}/employees/{employee_id}", headers=self.headers).json()
        self.assertEqual(len(detail["transactions"]), 1)

        found = self.client.get(f"{PREFIX}/employees", headers=self.headers, params={"search": "motor"})
        self.assertEqual([e["id"] for e in found.json()], [employee_id])

    def test_duplicate_cpf(self) -> None:
        employee = {
            "name": "Ana",
            "job_title": "Analista",
            "base_salary": 1,
            "status": "Ativo",
            "cpf": "123.456.789-00",
        }
        self.assertEqual(self.post("/employees", employee).status_code, 201)
        self.assertEqual(self.post("/employees", {**employee, "name": "Bia"}).status_code, 400)


class TestTrucksAndTrips(DomainTestCase):
    def test_plate_is_unique_case_insensitively(self) -> None:
        self.assertEqual(self.post("/trucks", TRUCK).status_code, 201)
        self.assertEqual(self.post("/trucks", {**TRUCK, "plate": "ABC1D23"}).status_code, 400)

    def test_trip_requires_existing_truck(self) -> None:
        trip = {"truck_id": 555, "destination": "Curitiba", "driver": "Rui", "date": "01/03/2025", "freight_value": 10}
        resp = self.post("/trips", trip)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "truck not found")

    def test_truck_with_trips_cannot_be_deleted_and_summary(self) -> None:
        truck_id = self.post("/trucks", TRUCK).json()["id"]
        base = {"truck_id": truck_id, "destination": "Curitiba", "driver": "Rui", "date": "01/03/2025"}
        t1 = self.post("/trips", {**base, "freight_value": 1000}).json()["id"]
        self.post("/trips", {**base, "freight_value": 500, "status": "cancelada"})
        self.post("/trips", {**base, "freight_value": 250, "date": "01/04/2025"})

        patched = self.client.patch(
            f"{PREFIX}/trips/{t1}/status", headers=self.headers, json={"status": "concluida"}
        )
        self.assertEqual(patched.json()["status"], "concluida")

        summary = self.client.get(
            f"{PREFIX}/trips/summary",
            headers=self.headers,
            params={"start_date": "2025-03-01", "end_date": "2025-03-31"},
        ).json()["summary"]
        self.assertEqual(summary["total_trips"], 2)
        self.assertEqual(summary["total_freight"], 1500)
        self.assertEqual(summary["completed_trips"], 1)
        self.assertEqual(summary["cancelled_trips"], 1)
        self.assertEqual(summary["in_progress_trips"], 0)

        resp = self.client.delete(f"{PREFIX}/trucks/{truck_id}", headers=self.headers)
        self.assertEqual(resp.status_code, 400)

        detail = self.client.get(f"{PREFIX}/trucks/{truck_id}", headers=self.headers).json()
        self.assertEqual(len(detail["trips"]), 3)

    def test_trip_with_expenses_cannot_be_deleted(self) -> None:
        trip = {"destination": "Santos", "driver": "Rui", "date": "2025-05-02", "freight_value": 0}
        trip_id = self.post("/trips", trip).json()["id"]
        expense = {"trip_id": trip_id, "description": "Pedágio", "amount": 35.5, "date": "02/05/2025", "category": "pedagio"}
        self.assertEqual(self.post("/trip-expenses", expense).status_code, 201)
        self.assertEqual(self.post("/trip-expenses", {**expense, "amount": 0}).status_code, 400)
        self.assertEqual(self.post("/trip-expenses", {**expense, "trip_id": 999}).status_code, 404)

        resp = self.client.delete(f"{PREFIX}/trips/{trip_id}", headers=self.headers)
        self.assertEqual(resp.status_code, 400)

    def test_maintenance_for_unknown_truck(self) -> None:
        body = {"truck_id": 31337, "date": "01/01/2025", "service": "Óleo", "km": 1000, "value": 300}
        self.assertEqual(self.post("/maintenance", body).status_code, 404)

    def test_missing_permission(self) -> None:
        headers = self.caller("viewer@example.com", ["trucks.view"])
        resp = self.client.post(f"{PREFIX}/trucks", headers=headers, json=TRUCK)
        self.assertEqual(resp.status_code, 403)
