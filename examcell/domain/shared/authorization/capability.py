"""Authorization capabilities: all operations subject to access control."""

from enum import StrEnum


class Capability(StrEnum):
    """Structured enum of all authorization-relevant operations."""

    # Exam office
    QP_ASSIGN = "qp:assign"
    QP_LIST_ALL = "qp:list_all"
    QP_SEND_TO_SCRUTINY = "qp:send_to_scrutiny"
    QP_APPROVE = "qp:approve"
    QP_SEND_BACK = "qp:send_back"
    QP_DELETE = "qp:delete"

    # Reads
    QP_READ = "qp:read"
    QP_LIST_OWN = "qp:list_own"

    # Setter
    QP_EDIT = "qp:edit"
    QP_SUBMIT = "qp:submit"

    # Scrutiny
    QP_SCRUTINY_EDIT = "qp:scrutiny_edit"
    QP_SCRUTINY_SUBMIT = "qp:scrutiny_submit"
