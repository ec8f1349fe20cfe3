from __future__ import annotations

from dataclasses import dataclass

from .adjustments.mysql_adjustment_repository import MySQLAdjustmentRepository
from .adjustments.service import AdjustmentImportService, AdjustmentService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceProcessingService
from .core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_TIMEZONE_OFFSET_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .punches.mysql_punch_repository import MySQLPunchRepository
from .reports.calculator.standard_calculator import StandardPenaltyCalculator
from .reports.service import AttendanceReportService
from .rules.mysql_rule_repository import MySQLRuleRepository
from .rules.service import RuleService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    punches_repo: MySQLPunchRepository
    rules_repo: MySQLRuleRepository
    adjustments_repo: MySQLAdjustmentRepository
    leaves_repo: MySQLLeaveRepository
    attendance_repo: MySQLAttendanceRepository

    processing_service: AttendanceProcessingService
    adjustment_import_service: AdjustmentImportService
    adjustment_service: AdjustmentService
    rule_service: RuleService
    report_service: AttendanceReportService


def build_container(
    *,
    db_config: dict,
    timezone_offset_minutes: int = DEFAULT_TIMEZONE_OFFSET_MINUTES,
    grace_minutes: int = DEFAULT_GRACE_MINUTES,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    punches_repo = MySQLPunchRepository(conn)
    rules_repo = MySQLRuleRepository(conn)
    adjustments_repo = MySQLAdjustmentRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    processing_service = AttendanceProcessingService(
        employees=employees_repo,
        punches=punches_repo,
        rules=rules_repo,
        adjustments=adjustments_repo,
        leaves=leaves_repo,
        attendance=attendance_repo,
        timezone_offset_minutes=timezone_offset_minutes,
        grace_minutes=grace_minutes,
    )
    adjustment_import_service = AdjustmentImportService(
        adjustments_repo,
        employees_repo,
        processing=processing_service,
    )
    adjustment_service = AdjustmentService(adjustments_repo, employees_repo)
    rule_service = RuleService(rules_repo)
    report_service = AttendanceReportService(
        attendance_repo,
        employees_repo,
        calculator=StandardPenaltyCalculator(),
        timezone_offset_minutes=timezone_offset_minutes,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        punches_repo=punches_repo,
        rules_repo=rules_repo,
        adjustments_repo=adjustments_repo,
        leaves_repo=leaves_repo,
        attendance_repo=attendance_repo,
        processing_service=processing_service,
        adjustment_import_service=adjustment_import_service,
        adjustment_service=adjustment_service,
        rule_service=rule_service,
        report_service=report_service,
    )
