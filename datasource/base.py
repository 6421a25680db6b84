"""
Data Source Contract
====================

Both quiz data sources (the remote quiz service and the static data file)
implement :class:`QuizDataSource`. Every failure they hit, from the network
to a malformed record, surfaces as :class:`DataSourceError`.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence

from models.quiz_models import Category, Question, ResultSummary

QUESTIONS_PER_QUIZ = 10


class DataSourceError(Exception):
    """Raised when categories, questions or results cannot be obtained."""


class QuizDataSource(ABC):
    @abstractmethod
    async def list_categories(self) -> List[Category]:
        ...

    @abstractmethod
    async def start_quiz(self, category_name: str, count: int = QUESTIONS_PER_QUIZ) -> List[Question]:
        """Returns the ordered question set for a new attempt."""

    @abstractmethod
    async def submit_quiz(self, answers: Dict[str, str], questions: Sequence[Question]) -> ResultSummary:
        """Scores an attempt. ``answers`` maps question ids (as strings) to option keys."""
