"""HTTP tests for the API routes."""

from datetime import datetime
from decimal import Decimal
from io import BytesIO

import pytest
import pytest_asyncio
from openpyxl import load_workbook

from tests.integration.conftest import ADMIN_EMAIL, add_employee, add_entry, add_shop

API = "/api/v1"

SETTINGS_PAYLOAD = {
    "payroll_start_day": 1,
    "payroll_end_day": 31,
    "work_day_start_time": "08:00",
    "work_day_end_time": "17:00",
    "overtime_rate": "1.5",
    "weekend_rate": "2.0",
    "holiday_rate": "2.5",
    "holidays": [{"date": "2024-03-21", "name": "Human Rights Day"}],
}

EMPLOYEE_PAYLOAD = {
    "name": "Thandi",
    "surname": "Nkosi",
    "email": "thandi@shop.test",
    "cell_number": "0821234567",
    "id_number": "9001015800087",
    "hourly_rate": "120",
}


@pytest_asyncio.fixture
async def seeded_employee(session_factory):
    """An employee with one 11.5 hour weekday shift, committed."""
    async with session_factory() as session:
        shop = await add_shop(session)
        employee = await add_employee(session, shop)
        await add_entry(session, employee, datetime(2024, 1, 2, 8), datetime(2024, 1, 2, 19, 30))
        await session.commit()
        return employee


class TestHealthAndAuth:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "healthy"

    async def test_live(self, client):
        response = await client.get("/live")
        assert response.json() == {"status": "alive"}

    async def test_ready_reports_pay_settings(self, client, auth_headers):
        before = await client.get("/ready")
        assert before.json() == {"status": "unconfigured", "pay_settings": "missing"}

        await client.put(f"{API}/settings", json=SETTINGS_PAYLOAD, headers=auth_headers)

        after = await client.get("/ready")
        assert after.json() == {"status": "ready", "pay_settings": "configured"}

    async def test_login_rejects_wrong_password(self, client):
        response = await client.post(
            f"{API}/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong"}
        )
        assert response.status_code == 401

    async def test_token_required(self, client):
        response = await client.get(f"{API}/employees")
        assert response.status_code == 401

    async def test_garbage_token(self, client):
        response = await client.get(
            f"{API}/employees", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"


class TestShopsAndEmployees:
    async def test_create_and_list(self, client, auth_headers):
        shop = await client.post(
            f"{API}/shops", json={"name": "Main Street"}, headers=auth_headers
        )
        assert shop.status_code == 201
        shop_id = shop.json()["shop_id"]

        employee = await client.post(
            f"{API}/employees",
            json={**EMPLOYEE_PAYLOAD, "shop_id": shop_id},
            headers=auth_headers,
        )
        assert employee.status_code == 201
        assert Decimal(employee.json()["hourly_rate"]) == Decimal("120")

        shops = await client.get(f"{API}/shops", headers=auth_headers)
        assert shops.json()[0]["employee_count"] == 1

    async def test_shop_with_employees_cannot_be_deleted(self, client, auth_headers, seeded_employee):
        response = await client.delete(
            f"{API}/shops/{seeded_employee.shop_id}", headers=auth_headers
        )

        assert response.status_code == 409
        assert response.json()["code"] == "SHOP_HAS_EMPLOYEES"

    async def test_unassign_then_delete_shop(self, client, auth_headers, seeded_employee):
        unassigned = await client.put(
            f"{API}/employees/{seeded_employee.employee_id}/shop",
            json={"shop_id": None},
            headers=auth_headers,
        )
        assert unassigned.json()["shop_id"] is None

        response = await client.delete(
            f"{API}/shops/{seeded_employee.shop_id}", headers=auth_headers
        )
        assert response.status_code == 204

    async def test_unknown_employee_is_404(self, client, auth_headers):
        response = await client.get(
            f"{API}/employees/00000000-0000-0000-0000-000000000000", headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    async def test_document_upload_download_delete(self, client, auth_headers, seeded_employee):
        base = f"{API}/employees/{seeded_employee.employee_id}/documents"
        uploaded = await client.post(
            base,
            files=[("files", ("id copy.pdf", b"%PDF-1.4 test", "application/pdf"))],
            headers=auth_headers,
        )
        assert uploaded.status_code == 201
        (stored_name,) = uploaded.json()["documents"]

        downloaded = await client.get(f"{base}/{stored_name}", headers=auth_headers)
        assert downloaded.status_code == 200
        assert downloaded.content == b"%PDF-1.4 test"

        removed = await client.delete(f"{base}/{stored_name}", headers=auth_headers)
        assert removed.json()["documents"] == []

        gone = await client.get(f"{base}/{stored_name}", headers=auth_headers)
        assert gone.status_code == 404

    async def test_delete_employee(self, client, auth_headers, seeded_employee):
        response = await client.delete(
            f"{API}/employees/{seeded_employee.employee_id}", headers=auth_headers
        )
        assert response.status_code == 204

        entries = await client.get(f"{API}/time-entries", headers=auth_headers)
        assert entries.json() == []


class TestTimeClock:
    async def test_clock_in_and_out(self, client, auth_headers, seeded_employee):
        employee_id = str(seeded_employee.employee_id)

        opened = await client.post(
            f"{API}/time-entries", json={"employee_id": employee_id}, headers=auth_headers
        )
        assert opened.status_code == 201
        assert opened.json()["clock_out"] is None

        again = await client.post(
            f"{API}/time-entries", json={"employee_id": employee_id}, headers=auth_headers
        )
        assert again.status_code == 409
        assert again.json()["code"] == "ALREADY_CLOCKED_IN"

        entry_id = opened.json()["time_entry_id"]
        closed = await client.put(f"{API}/time-entries/{entry_id}/clock-out", headers=auth_headers)
        assert closed.status_code == 200
        assert closed.json()["clock_out"] is not None
        assert closed.json()["employee_name"] == "Thandi Nkosi"

        twice = await client.put(f"{API}/time-entries/{entry_id}/clock-out", headers=auth_headers)
        assert twice.status_code == 409
        assert twice.json()["code"] == "ALREADY_CLOCKED_OUT"

    async def test_inactive_employee(self, client, auth_headers, session_factory):
        async with session_factory() as session:
            employee = await add_employee(session, is_active=False)
            await session.commit()

        response = await client.post(
            f"{API}/time-entries",
            json={"employee_id": str(employee.employee_id)},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["code"] == "EMPLOYEE_INACTIVE"


class TestSettings:
    async def test_get_seeds_defaults(self, client, auth_headers):
        response = await client.get(f"{API}/settings", headers=auth_headers)

        body = response.json()
        assert response.status_code == 200
        assert body["payroll_start_day"] == 25
        assert body["work_day_end_time"] == "17:00"
        assert {"date": "2024-12-25", "name": "Christmas Day"} in body["holidays"]

    async def test_update(self, client, auth_headers):
        response = await client.put(f"{API}/settings", json=SETTINGS_PAYLOAD, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["holidays"] == SETTINGS_PAYLOAD["holidays"]

    @pytest.mark.parametrize(
        "field,value",
        [
            ("overtime_rate", "0.5"),
            ("overtime_rate", "1.25"),
            ("weekend_rate", "1.75"),
            ("holiday_rate", "100"),
            ("work_day_start_time", "25:00"),
            ("payroll_end_day", 40),
        ],
    )
    async def test_invalid_update_is_422(self, client, auth_headers, field, value):
        response = await client.put(
            f"{API}/settings", json={**SETTINGS_PAYLOAD, field: value}, headers=auth_headers
        )
        assert response.status_code == 422

    async def test_rejected_rate_leaves_stored_settings(self, client, auth_headers):
        await client.put(f"{API}/settings", json=SETTINGS_PAYLOAD, headers=auth_headers)
        await client.put(
            f"{API}/settings",
            json={**SETTINGS_PAYLOAD, "overtime_rate": "1.25"},
            headers=auth_headers,
        )

        stored = await client.get(f"{API}/settings", headers=auth_headers)
        assert Decimal(stored.json()["overtime_rate"]) == Decimal("1.5")

    async def test_update_response_matches_stored_row(self, client, auth_headers):
        payload = {**SETTINGS_PAYLOAD, "overtime_rate": "1.7", "weekend_rate": "2.2"}
        updated = await client.put(f"{API}/settings", json=payload, headers=auth_headers)
        stored = await client.get(f"{API}/settings", headers=auth_headers)

        assert updated.status_code == 200
        for field in ("overtime_rate", "weekend_rate", "holiday_rate"):
            assert Decimal(updated.json()[field]) == Decimal(stored.json()[field])
        assert Decimal(stored.json()["weekend_rate"]) == Decimal("2.2")


class TestReports:
    async def test_report_requires_settings(self, client, auth_headers, seeded_employee):
        response = await client.post(
            f"{API}/reports",
            json={"start_date": "2024-01-01", "end_date": "2024-01-31"},
            headers=auth_headers,
        )

        assert response.status_code == 500
        assert response.json()["code"] == "SETTINGS_NOT_FOUND"

    async def test_payroll_report(self, client, auth_headers, seeded_employee):
        await client.put(f"{API}/settings", json=SETTINGS_PAYLOAD, headers=auth_headers)

        response = await client.post(
            f"{API}/reports",
            json={"start_date": "2024-01-01", "end_date": "2024-01-31"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["report_type"] == "payroll"
        assert body["period"] == {"start_date": "2024-01-01", "end_date": "2024-01-31"}
        (row,) = body["employees"]
        assert Decimal(row["regular_hours"]) == Decimal("9")
        assert Decimal(row["overtime_hours"]) == Decimal("2.5")
        assert Decimal(row["total_pay"]) == Decimal("1530.00")
        assert row["days_absent"] == 30
        assert Decimal(body["totals"]["total_pay"]) == Decimal("1530.00")

    async def test_half_open_date_range_is_422(self, client, auth_headers):
        response = await client.post(
            f"{API}/reports", json={"start_date": "2024-01-01"}, headers=auth_headers
        )
        assert response.status_code == 422

    async def test_default_period(self, client, auth_headers):
        await client.put(f"{API}/settings", json=SETTINGS_PAYLOAD, headers=auth_headers)

        response = await client.post(f"{API}/reports", json={}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["period"]["start_date"].endswith("-01")

    async def test_excel_download(self, client, auth_headers, seeded_employee):
        await client.put(f"{API}/settings", json=SETTINGS_PAYLOAD, headers=auth_headers)

        response = await client.post(
            f"{API}/reports/download",
            json={
                "start_date": "2024-01-01",
                "end_date": "2024-01-31",
                "report_type": "overtime",
                "format": "excel",
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert "attachment; filename=report-overtime-" in response.headers["content-disposition"]
        ws = load_workbook(BytesIO(response.content)).active
        assert ws.title == "Overtime"
        assert ws.cell(row=2, column=1).value == "Thandi Nkosi"

    async def test_pdf_download(self, client, auth_headers, seeded_employee):
        await client.put(f"{API}/settings", json=SETTINGS_PAYLOAD, headers=auth_headers)

        response = await client.post(
            f"{API}/reports/download",
            json={
                "start_date": "2024-01-01",
                "end_date": "2024-01-31",
                "report_type": "attendance",
                "format": "pdf",
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")


class TestDashboard:
    async def test_dashboard(self, client, auth_headers, seeded_employee):
        response = await client.get(f"{API}/dashboard?range=year", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["total_employees"] == 1
        assert body["total_shops"] == 1
        assert body["shop_performance"][0]["employee_count"] == 1
