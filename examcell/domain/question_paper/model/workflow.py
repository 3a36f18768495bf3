"""The question-paper transition table.

Every legal status change, the actor that may trigger it, the capability the
caller's role must hold and the history label it records live here. The
aggregate and the service both read from this table; nothing else compares
status strings.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from examcell.domain.question_paper.model.value import PaperStatus
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.error import StateConflictError


class WorkflowEvent(StrEnum):
    EDIT_BY_SETTER = "edit_by_setter"
    SUBMIT_TO_COE = "submit_to_coe"
    SEND_TO_SCRUTINY = "send_to_scrutiny"
    EDIT_BY_SCRUTINY = "edit_by_scrutiny"
    SUBMIT_AFTER_SCRUTINY = "submit_after_scrutiny"
    APPROVE = "approve"
    SEND_BACK = "send_back"
    DELETE = "delete"


class Actor(StrEnum):
    EXAM_OFFICE = "exam_office"
    SETTER = "setter"
    SCRUTINY = "scrutiny"


@dataclass(frozen=True)
class Transition:
    event: WorkflowEvent
    actor: Actor
    capability: Capability
    sources: frozenset[PaperStatus]
    target: PaperStatus | None  # None keeps the current status
    action: str  # history label
    requires_note: bool = False
    promotions: Mapping[PaperStatus, PaperStatus] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def next_status(self, current: PaperStatus) -> PaperStatus:
        if current in self.promotions:
            return self.promotions[current]
        return self.target if self.target is not None else current

    def ensure_source(self, current: PaperStatus) -> None:
        if current not in self.sources:
            allowed = ", ".join(sorted(self.sources))
            raise StateConflictError(
                f"Cannot {self.event} a paper in status {current} (allowed from: {allowed})"
            )


CREATED_ACTION = "Assigned"

_SETTER_EDITABLE = frozenset(
    {PaperStatus.ASSIGNED, PaperStatus.DRAFT, PaperStatus.CORRECTIONS_REQUESTED}
)

TRANSITIONS: Mapping[WorkflowEvent, Transition] = MappingProxyType(
    {
        t.event: t
        for t in (
            Transition(
                event=WorkflowEvent.EDIT_BY_SETTER,
                actor=Actor.SETTER,
                capability=Capability.QP_EDIT,
                sources=_SETTER_EDITABLE,
                target=None,
                action="EditedBySetter",
                promotions=MappingProxyType({PaperStatus.ASSIGNED: PaperStatus.DRAFT}),
            ),
            Transition(
                event=WorkflowEvent.SUBMIT_TO_COE,
                actor=Actor.SETTER,
                capability=Capability.QP_SUBMIT,
                sources=_SETTER_EDITABLE,
                target=PaperStatus.SUBMITTED_TO_COE,
                action="SubmittedToCOE",
            ),
            Transition(
                event=WorkflowEvent.SEND_TO_SCRUTINY,
                actor=Actor.EXAM_OFFICE,
                capability=Capability.QP_SEND_TO_SCRUTINY,
                sources=frozenset({PaperStatus.SUBMITTED_TO_COE}),
                target=PaperStatus.UNDER_SCRUTINY,
                action="SentToScrutiny",
            ),
            Transition(
                event=WorkflowEvent.EDIT_BY_SCRUTINY,
                actor=Actor.SCRUTINY,
                capability=Capability.QP_SCRUTINY_EDIT,
                sources=frozenset({PaperStatus.UNDER_SCRUTINY}),
                target=None,
                action="EditedByScrutiny",
            ),
            Transition(
                event=WorkflowEvent.SUBMIT_AFTER_SCRUTINY,
                actor=Actor.SCRUTINY,
                capability=Capability.QP_SCRUTINY_SUBMIT,
                sources=frozenset({PaperStatus.UNDER_SCRUTINY}),
                target=PaperStatus.SUBMITTED_AFTER_SCRUTINY,
                action="SubmittedByScrutiny",
                requires_note=True,
            ),
            Transition(
                event=WorkflowEvent.APPROVE,
                actor=Actor.EXAM_OFFICE,
                capability=Capability.QP_APPROVE,
                sources=frozenset(
                    {
                        PaperStatus.SUBMITTED_TO_COE,
                        PaperStatus.UNDER_SCRUTINY,
                        PaperStatus.SUBMITTED_AFTER_SCRUTINY,
                    }
                ),
                target=PaperStatus.APPROVED_LOCKED,
                action="ApprovedLocked",
            ),
            Transition(
                event=WorkflowEvent.SEND_BACK,
                actor=Actor.EXAM_OFFICE,
                capability=Capability.QP_SEND_BACK,
                sources=frozenset({PaperStatus.SUBMITTED_TO_COE, PaperStatus.UNDER_SCRUTINY}),
                target=PaperStatus.CORRECTIONS_REQUESTED,
                action="CorrectionsRequested",
                requires_note=True,
            ),
            Transition(
                event=WorkflowEvent.DELETE,
                actor=Actor.EXAM_OFFICE,
                capability=Capability.QP_DELETE,
                sources=frozenset(PaperStatus) - {PaperStatus.APPROVED_LOCKED},
                target=None,
                action="Deleted",
            ),
        )
    }
)


def transition_for(event: WorkflowEvent) -> Transition:
    return TRANSITIONS[event]
