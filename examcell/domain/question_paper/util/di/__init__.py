from examcell.domain.question_paper.util.di.provider import QuestionPaperProvider

__all__ = ["QuestionPaperProvider"]
