from collections.abc import Mapping
from typing import Any
from uuid import UUID

from examcell.domain.auth.model.role import Role
from examcell.domain.auth.model.value import StaffId, StaffMember
from examcell.domain.subject.model.value import Subject, SubjectId


def row_to_staff_member(row: Mapping[str, Any]) -> StaffMember:
    return StaffMember(
        id=StaffId(UUID(row["id"])),
        external_id=row.get("external_id"),
        name=row["name"],
        role=Role(row["role"]),
        department=row.get("department"),
        is_active=bool(row["is_active"]),
    )


def staff_member_to_dict(member: StaffMember) -> dict[str, Any]:
    return {
        "id": str(member.id),
        "external_id": member.external_id,
        "name": member.name,
        "role": member.role.value,
        "department": member.department,
        "is_active": member.is_active,
    }


def row_to_subject(row: Mapping[str, Any]) -> Subject:
    return Subject(
        id=SubjectId(UUID(row["id"])),
        code=row["code"],
        name=row["name"],
        department=row["department"],
        semester=row["semester"],
    )


def subject_to_dict(subject: Subject) -> dict[str, Any]:
    return {
        "id": str(subject.id),
        "code": subject.code,
        "name": subject.name,
        "department": subject.department,
        "semester": subject.semester,
    }
