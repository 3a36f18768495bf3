from examcell.domain.question_paper.model.aggregate import QuestionPaper
from examcell.domain.question_paper.model.value import PaperId, PaperStatus
from examcell.domain.shared.command import Result


class PaperTransitioned(Result):
    """Outcome shared by every workflow command that moves a paper."""

    id: PaperId
    status: PaperStatus
    version: int

    @classmethod
    def of(cls, paper: QuestionPaper) -> "PaperTransitioned":
        return cls(id=paper.id, status=paper.status, version=paper.version)
