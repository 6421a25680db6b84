"""
Quiz Session
============

One attempt at a quiz: the fixed question order, the cursor over it and the
answers recorded so far.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from models.quiz_models import OPTION_KEYS, Question, QuestionId


class QuizError(Exception):
    """Base class for rejected quiz actions."""


class InvalidAnswerError(QuizError, ValueError):
    pass


class IncompleteSubmissionError(QuizError):
    def __init__(self, answered: int, total: int):
        self.answered = answered
        self.total = total
        super().__init__(f"Please answer all questions. You've answered {answered} out of {total}.")


@dataclass
class QuizSession:
    questions: Tuple[Question, ...]
    index: int = 0
    answers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.questions = tuple(self.questions)
        if not self.questions:
            raise QuizError("A quiz session needs at least one question.")
        self._ids = {q.answer_id for q in self.questions}
        if len(self._ids) != len(self.questions):
            raise QuizError("Quiz questions must have unique ids.")
        self.index = min(max(self.index, 0), len(self.questions) - 1)

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current(self) -> Question:
        return self.questions[self.index]

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index == self.total - 1

    @property
    def answered_count(self) -> int:
        return len(self.answers)

    def answer_for(self, question: Question):
        return self.answers.get(question.answer_id)

    def is_answered(self, question: Question) -> bool:
        return question.answer_id in self.answers

    def all_answered(self) -> bool:
        return self.answered_count >= self.total

    def record_answer(self, question_id: QuestionId, option_key: str) -> None:
        key = str(question_id)
        if key not in self._ids:
            raise InvalidAnswerError(f"Question {question_id!r} is not part of this quiz.")
        if option_key not in OPTION_KEYS:
            raise InvalidAnswerError(f"Invalid option {option_key!r}; expected one of {', '.join(OPTION_KEYS)}.")
        self.answers[key] = option_key

    def can_advance(self) -> bool:
        return not self.is_last and self.is_answered(self.current)

    def can_submit(self) -> bool:
        return self.is_last and self.is_answered(self.current)

    def advance(self) -> bool:
        if self.is_last:
            return False
        self.index += 1
        return True

    def retreat(self) -> bool:
        if self.is_first:
            return False
        self.index -= 1
        return True

    def progress(self) -> float:
        return (self.index + 1) / self.total

    def check_complete(self) -> None:
        if not self.all_answered():
            raise IncompleteSubmissionError(self.answered_count, self.total)
