"""Institution roles, as carried by the identity provider."""

from enum import StrEnum


class Role(StrEnum):
    """Flat role set; permissions come from the capability table, not ordering."""

    ADMIN = "Admin"
    PRINCIPAL = "Principal"
    REGISTRAR = "Registrar"
    COE = "COE"
    ASSISTANT_COE = "AssistantCOE"
    CHAIRMAN_OF_EXAMS = "ChairmanOfExams"
    OFFICE_EXAM = "OfficeExam"
    OFFICE_ADMISSIONS = "OfficeAdmissions"
    OFFICE_FEE = "OfficeFee"
    HOD = "HOD"
    STAFF = "Staff"
    MARK_ENTRY_CASE_WORKER = "MarkEntryCaseWorker"
    STUDENT = "Student"


EXAM_OFFICE: frozenset[Role] = frozenset({Role.COE, Role.ASSISTANT_COE, Role.CHAIRMAN_OF_EXAMS})
"""Roles empowered to assign, route, approve and send back question papers."""

ACADEMIC_STAFF: frozenset[Role] = frozenset({Role.STAFF, Role.HOD, Role.COE, Role.ASSISTANT_COE})
"""Roles that may be recorded as a setter or scrutiny reviewer."""
