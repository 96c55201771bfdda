"""API tests for the dashboard and reports."""

from datetime import date

from fleetdesk.core.config import settings
from fleetdesk.core.permissions import DASHBOARD_VIEW, REPORTS_VIEW
from fleetdesk.models import Employee, EmployeeTransaction, Maintenance, Truck
from tests.support import ApiTestCase

PREFIX = settings.API_V1_PREFIX


class TestDashboardAndReports(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        with self.session() as db:
            ana = Employee(name="Ana", job_title="Motorista", base_salary=3000, status="Ativo", hire_date=date(2024, 1, 2))
            bia = Employee(name="Bia", job_title="Auxiliar", base_salary=1000, status="Inativo", hire_date=date(2023, 5, 1))
            truck = Truck(name="T1", plate="AAA1111", brand="Volvo", year=2020, doc_expiry=date(2026, 1, 1), renavam="1")
            db.add_all([ana, bia, truck])
            db.flush()
            db.add_all(
                [
                    EmployeeTransaction(employee_id=ana.id, type="Crédito", amount=500, date=date(2025, 1, 5)),
                    EmployeeTransaction(employee_id=ana.id, type="Débito", amount=120, date=date(2025, 1, 6)),
                    Maintenance(truck_id=truck.id, date=date(2025, 2, 1), service="Pneus", km=1000, value=800),
                ]
            )
            db.commit()

    def test_dashboard(self) -> None:
        headers = self.caller("viewer@example.com", [DASHBOARD_VIEW])
        resp = self.client.get(f"{PREFIX}/dashboard", headers=headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        summary = resp.json()["summary"]
        self.assertEqual(summary["total_employees"], 2)
        self.assertEqual(summary["active_employees"], 1)
        self.assertEqual(summary["total_salaries"], 3000)
        self.assertEqual(summary["maintenance_cost"], 800)
        self.assertEqual(summary["balance"], 380)

        quick = self.client.get(f"{PREFIX}/dashboard/quick-stats", headers=headers).json()
        self.assertEqual(quick["total_trucks"], 1)

    def test_reports_need_reports_view(self) -> None:
        headers = self.caller("dash@example.com", [DASHBOARD_VIEW])
        self.assertEqual(self.client.get(f"{PREFIX}/reports/employees", headers=headers).status_code, 403)

    def test_employee_and_financial_reports(self) -> None:
        headers = self.caller("analyst@example.com", [REPORTS_VIEW])
        employees = self.client.get(
            f"{PREFIX}/reports/employees", headers=headers, params={"status": "Ativo"}
        ).json()
        self.assertEqual([r["name"] for r in employees["rows"]], ["Ana"])
        self.assertEqual(employees["filters"]["status"], "Ativo")

        financial = self.client.get(f"{PREFIX}/reports/financial", headers=headers).json()
        self.assertEqual(financial["summary"]["balance"], 380)
        self.assertEqual(financial["summary"]["by_type"], {"Crédito": 1, "Débito": 1})

        maintenance = self.client.get(f"{PREFIX}/reports/maintenance", headers=headers).json()
        self.assertEqual(maintenance["summary"]["average_cost"], 800)

        overview = self.client.get(f"{PREFIX}/reports/system-overview", headers=headers).json()
        self.assertEqual(overview["summary"]["inactive_employees"], 1)
