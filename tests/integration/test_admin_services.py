"""Database tests for shop, employee, settings and dashboard services."""

from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from shop_payroll.errors import NotFoundError, ShopHasEmployeesError
from shop_payroll.models import TimeEntry
from shop_payroll.services.dashboard_service import (
    DashboardRange,
    DashboardService,
    range_start,
)
from shop_payroll.services.employee_service import EmployeeService
from shop_payroll.services.report_service import ReportService
from shop_payroll.services.repository import SqlReportRepository
from shop_payroll.services.settings_service import DEFAULT_HOLIDAYS, SettingsService
from shop_payroll.services.shop_service import ShopService

from tests.integration.conftest import add_employee, add_entry, add_shop


class TestShopService:
    async def test_list_counts_employees(self, session):
        north = await add_shop(session, "North")
        await add_shop(session, "South")
        await add_employee(session, north, name="Alice")
        await add_employee(session, north, name="Bongani")

        rows = await ShopService(session).list_shops()
        assert [(shop.name, count) for shop, count in rows] == [("North", 2), ("South", 0)]

    async def test_delete_guarded_by_assigned_employees(self, session):
        shop = await add_shop(session)
        await add_employee(session, shop)

        with pytest.raises(ShopHasEmployeesError) as exc_info:
            await ShopService(session).delete_shop(shop.shop_id)
        assert exc_info.value.employee_count == 1

    async def test_delete_empty_shop(self, session):
        shop = await add_shop(session)
        await ShopService(session).delete_shop(shop.shop_id)

        with pytest.raises(NotFoundError):
            await ShopService(session).get_shop(shop.shop_id)


class TestEmployeeService:
    async def test_create_requires_existing_shop(self, session, documents):
        with pytest.raises(NotFoundError):
            await EmployeeService(session, documents).create_employee(
                {
                    "name": "Sipho",
                    "surname": "Mokoena",
                    "email": "sipho@shop.test",
                    "cell_number": "0820000000",
                    "id_number": "9001015800087",
                    "shop_id": uuid4(),
                }
            )

    async def test_delete_cascades_entries_and_documents(self, session, documents):
        employee = await add_employee(session)
        await add_entry(session, employee, datetime(2024, 1, 2, 8), datetime(2024, 1, 2, 16))
        await add_entry(session, employee, datetime(2024, 1, 3, 8))
        service = EmployeeService(session, documents)
        await service.add_document(employee.employee_id, "id copy.pdf", b"%PDF-1.4")
        assert documents.employee_dir(employee.employee_id).exists()

        await service.delete_employee(employee.employee_id)
        await session.commit()

        remaining = await session.scalar(select(func.count()).select_from(TimeEntry))
        assert remaining == 0
        # files stay until the delete is committed and purged
        assert documents.employee_dir(employee.employee_id).exists()

        await service.purge_documents(employee.employee_id)
        assert not documents.employee_dir(employee.employee_id).exists()

    async def test_rolled_back_delete_keeps_documents(self, session, documents):
        employee = await add_employee(session)
        service = EmployeeService(session, documents)
        updated = await service.add_document(employee.employee_id, "contract.pdf", b"data")
        stored_name = updated.documents[0]
        await session.commit()
        employee_id = employee.employee_id

        await service.delete_employee(employee_id)
        await session.rollback()

        survivor = await service.get_employee(employee_id)
        assert survivor.documents == [stored_name]
        assert documents.path_for(employee.employee_id, stored_name).read_bytes() == b"data"

    async def test_documents_are_tracked_on_the_employee(self, session, documents):
        employee = await add_employee(session)
        service = EmployeeService(session, documents)

        updated = await service.add_document(employee.employee_id, "../../contract.pdf", b"data")
        stored_name = updated.documents[0]
        assert stored_name.endswith("-contract.pdf")
        assert documents.path_for(employee.employee_id, stored_name).read_bytes() == b"data"

        updated = await service.remove_document(employee.employee_id, stored_name)
        assert updated.documents == []
        assert documents.path_for(employee.employee_id, stored_name).exists()

        await service.discard_document(employee.employee_id, stored_name)
        assert not documents.path_for(employee.employee_id, stored_name).exists()

    async def test_remove_unknown_document(self, session, documents):
        employee = await add_employee(session)
        with pytest.raises(NotFoundError):
            await EmployeeService(session, documents).remove_document(
                employee.employee_id, "missing.pdf"
            )

    async def test_assign_and_unassign_shop(self, session, documents):
        shop = await add_shop(session)
        employee = await add_employee(session)
        service = EmployeeService(session, documents)

        assert (await service.assign_shop(employee.employee_id, shop.shop_id)).shop_id == shop.shop_id
        assert (await service.assign_shop(employee.employee_id, None)).shop_id is None

    async def test_list_filters(self, session, documents):
        shop = await add_shop(session)
        await add_employee(session, shop, name="Alice")
        await add_employee(session, name="Bongani", is_active=False)
        service = EmployeeService(session, documents)

        assert [e.name for e in await service.list_employees(shop_id=shop.shop_id)] == ["Alice"]
        assert [e.name for e in await service.list_employees(is_active=False)] == ["Bongani"]


class TestSettingsService:
    async def test_defaults_seeded_once(self, session):
        service = SettingsService(session)
        assert await service.get_settings() is None

        settings = await service.get_or_create_settings()
        assert settings.work_day_start_time == "08:00"
        assert settings.work_day_end_time == "17:00"
        assert Decimal(settings.overtime_rate) == Decimal("1.5")
        assert len(settings.holidays) == len(DEFAULT_HOLIDAYS)

        assert await service.get_or_create_settings() is settings

    async def test_update_replaces_holidays(self, session):
        service = SettingsService(session)
        await service.get_or_create_settings()

        settings = await service.update_settings(
            {"weekend_rate": Decimal("3.0"), "holidays": [{"date": "2025-01-01", "name": "NYD"}]}
        )
        assert settings.holidays == [{"date": "2025-01-01", "name": "NYD"}]
        assert Decimal(settings.weekend_rate) == Decimal("3")


class TestSqlReportRepository:
    async def test_report_uses_stored_settings(self, session):
        await SettingsService(session).get_or_create_settings()
        employee = await add_employee(session)
        await add_entry(session, employee, datetime(2024, 1, 2, 8), datetime(2024, 1, 2, 19, 30))

        report = await ReportService(SqlReportRepository(session)).generate_report(
            date(2024, 1, 2), date(2024, 1, 2)
        )

        assert len(report.employees) == 1
        row = report.employees[0]
        assert row.name == "Thandi Nkosi"
        assert row.regular_pay == Decimal("1080.00")
        assert row.overtime_pay == Decimal("450.00")
        assert row.total_pay == Decimal("1530.00")

    async def test_shop_filter_uses_current_assignment(self, session, documents):
        await SettingsService(session).get_or_create_settings()
        old_shop = await add_shop(session, "Old")
        new_shop = await add_shop(session, "New")
        employee = await add_employee(session, old_shop)
        await add_entry(session, employee, datetime(2024, 1, 2, 8), datetime(2024, 1, 2, 12))
        await EmployeeService(session, documents).assign_shop(employee.employee_id, new_shop.shop_id)

        service = ReportService(SqlReportRepository(session))
        old = await service.generate_report(date(2024, 1, 1), date(2024, 1, 31), shop_id=old_shop.shop_id)
        new = await service.generate_report(date(2024, 1, 1), date(2024, 1, 31), shop_id=new_shop.shop_id)

        assert old.employees == []
        assert [r.regular_hours for r in new.employees] == [Decimal("4")]

    async def test_entries_outside_range_are_excluded(self, session):
        await SettingsService(session).get_or_create_settings()
        employee = await add_employee(session)
        await add_entry(session, employee, datetime(2024, 1, 31, 23, 0), datetime(2024, 2, 1, 3, 0))
        await add_entry(session, employee, datetime(2024, 2, 1, 8, 0), datetime(2024, 2, 1, 9, 0))

        report = await ReportService(SqlReportRepository(session)).generate_report(
            date(2024, 2, 1), date(2024, 2, 29)
        )
        assert report.totals.total_hours == Decimal("1")

    async def test_missing_settings_row(self, session):
        repository = SqlReportRepository(session)
        assert await repository.get_rules() is None


class TestDashboardService:
    async def test_headline_numbers(self, session):
        now = datetime(2024, 1, 10, 12, 0)
        shop = await add_shop(session)
        alice = await add_employee(session, shop, name="Alice", hourly_rate="100")
        bongani = await add_employee(session, shop, name="Bongani", hourly_rate="50")
        await add_employee(session, name="Carol", hourly_rate="60", is_active=False)
        await add_entry(session, alice, datetime(2024, 1, 10, 7, 55))
        await add_entry(session, bongani, datetime(2024, 1, 9, 8, 0), datetime(2024, 1, 9, 12, 0))
        await add_entry(session, bongani, datetime(2024, 1, 10, 9, 30), datetime(2024, 1, 10, 11, 30))

        dashboard = await DashboardService(session).get_dashboard(DashboardRange.WEEK, now=now)

        assert dashboard.total_employees == 3
        assert dashboard.active_employees == 2
        assert dashboard.total_shops == 1
        assert dashboard.average_hourly_rate == Decimal("70.00")
        assert dashboard.attendance_today.present == 2
        assert dashboard.attendance_today.absent == 1
        assert dashboard.attendance_today.late == 1

        (performance,) = dashboard.shop_performance
        assert performance.employee_count == 2
        assert performance.average_rate == Decimal("75.00")
        # 4h05 open + 4h + 2h
        assert performance.total_hours == Decimal("10.08")

    def test_range_start_clamps_month_end(self):
        assert range_start(datetime(2024, 3, 31, 9), DashboardRange.MONTH) == datetime(2024, 2, 29, 9)
        assert range_start(datetime(2024, 1, 15), DashboardRange.YEAR) == datetime(2023, 1, 15)
        assert range_start(datetime(2024, 1, 15), DashboardRange.WEEK) == datetime(2024, 1, 8)
