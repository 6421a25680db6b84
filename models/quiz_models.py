"""
Data Models for Quiz Sessions
=============================

This module defines the data structures shared by the data sources, the scorer
and the dashboard: categories, questions and scored results. All models are
implemented as dataclasses.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

OPTION_KEYS = ("A", "B", "C", "D")

QuestionId = Union[str, int]


@dataclass(frozen=True)
class Category:
    name: str
    display_name: str
    question_count: int


@dataclass(frozen=True)
class Question:
    id: QuestionId
    text: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    # None when the data source keeps the key on its side
    correct_key: Optional[str] = None

    @property
    def answer_id(self) -> str:
        """Key used for this question in an answer map."""
        return str(self.id)

    def option(self, key: str) -> str:
        if key not in OPTION_KEYS:
            raise KeyError(key)
        return getattr(self, f"option_{key.lower()}")

    def options(self) -> List[Tuple[str, str]]:
        return [(key, self.option(key)) for key in OPTION_KEYS]


@dataclass
class ResultDetail:
    question_text: str
    user_answer: str
    correct_answer: str
    is_correct: bool
    question_id: Optional[QuestionId] = None


@dataclass
class ResultSummary:
    score: int
    total: int
    details: List[ResultDetail] = field(default_factory=list)
