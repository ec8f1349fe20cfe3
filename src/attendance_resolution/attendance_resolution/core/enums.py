from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Daily attendance status as stored and exported."""

    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"
    EXCUSED = "Excused"
    FRIDAY = "Friday"
    FRIDAY_ATTENDED = "Friday Attended"
    COMP_DAY = "Comp Day"
    EXCUSED_ABSENCE = "Excused Absence"
    LEAVE_DEDUCTION = "Leave Deduction"
    TERMINATION_PERIOD = "Termination Period"


class RuleType(str, Enum):
    CUSTOM_SHIFT = "custom_shift"
    ATTENDANCE_EXEMPT = "attendance_exempt"
    OVERNIGHT_STAY = "overnight_stay"
    # Accepted and stored, not interpreted by the engine.
    PENALTY_OVERRIDE = "penalty_override"
    IGNORE_BIOMETRIC = "ignore_biometric"
    OVERTIME_OVERNIGHT = "overtime_overnight"


class AdjustmentType(str, Enum):
    """Canonical labels of day adjustments (as they appear in HR sheets)."""

    MORNING_PERMISSION = "اذن صباحي"
    EVENING_PERMISSION = "اذن مسائي"
    HALF_DAY_LEAVE = "إجازة نص يوم"
    MISSION = "مأمورية"
    LEAVE_DEDUCTION = "إجازة بالخصم"
    EXCUSED_ABSENCE = "غياب بعذر"


class PenaltyType(str, Enum):
    LATE = "تأخير"
    ABSENCE = "غياب"
    MISSING_CHECKOUT = "سهو بصمة"
    EARLY_LEAVE = "انصراف مبكر"


class LeaveType(str, Enum):
    OFFICIAL = "official"
    COLLECTIONS = "collections"


class LeaveScope(str, Enum):
    ALL = "all"
    SECTOR = "sector"
    DEPARTMENT = "department"
    SECTION = "section"
    BRANCH = "branch"
    EMP = "emp"


class ScopeKind(str, Enum):
    ALL = "all"
    EMP = "emp"
    DEPT = "dept"
    SECTOR = "sector"


class ShiftSource(str, Enum):
    RULE_OVERRIDE = "Rule Override"
    SATURDAY_DEFAULT = "Saturday Default"
    NORMAL_DEFAULT = "Normal Default"
