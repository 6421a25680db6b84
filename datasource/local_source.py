"""
LocalQuizSource Module
======================

Serves quizzes from a static JSON data file: a flat list of question records
that is fetched once (over HTTP or from disk), grouped by category and then
sampled and scored in-process.

Note that the correct keys live in the data file, so anyone who can read the
file can read the answers.
"""

import json
import logging
import random
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import httpx

from analytics.metrics import score_quiz
from datasource.base import QUESTIONS_PER_QUIZ, DataSourceError, QuizDataSource
from datasource.parser import parse_question_record
from models.quiz_models import Category, Question, ResultSummary

UNCATEGORIZED = "Uncategorized"


def group_by_category(records) -> Dict[str, List[Question]]:
    """Groups raw records by their ``Category`` field, keeping first-seen order."""
    grouped: Dict[str, List[Question]] = {}
    seen_ids = set()
    for record in records:
        category_name, question = parse_question_record(record)
        if question.answer_id in seen_ids:
            raise DataSourceError(f"Duplicate Q_ID {question.id!r} in data file")
        seen_ids.add(question.answer_id)
        grouped.setdefault(category_name, []).append(question)
    return grouped


def sample_questions(pool: Sequence[Question], count: int,
                     rng: Optional[random.Random] = None) -> List[Question]:
    """
    Shuffles a copy of the pool and takes the first ``count`` questions
    (all of them when the pool is smaller). The pool itself is left untouched.
    """
    rng = rng or random
    shuffled = list(pool)
    rng.shuffle(shuffled)
    return shuffled[:max(count, 0)]


class LocalQuizSource(QuizDataSource):
    def __init__(self, location: str, timeout: float = 60.0,
                 rng: Optional[random.Random] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.location = location
        self.timeout = timeout
        self.rng = rng or random.Random()
        self.transport = transport
        self._questions: Optional[Dict[str, List[Question]]] = None

    @property
    def is_remote_file(self) -> bool:
        return self.location.startswith(("http://", "https://"))

    async def _fetch_text(self) -> str:
        if self.is_remote_file:
            try:
                async with httpx.AsyncClient(follow_redirects=True, timeout=self.timeout,
                                             transport=self.transport) as client:
                    resp = await client.get(self.location)
                    resp.raise_for_status()
                    return resp.text
            except httpx.HTTPError as e:
                raise DataSourceError(f"Failed to load local data file: {e}") from e
        try:
            return Path(self.location).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DataSourceError(f"Failed to load local data file: {e}") from e

    async def load(self) -> Dict[str, List[Question]]:
        """Fetches and groups the data file; later calls reuse the cached result."""
        if self._questions is None:
            try:
                raw_data = json.loads(await self._fetch_text())
            except json.JSONDecodeError as e:
                raise DataSourceError(f"Data file {self.location} is not valid JSON: {e}") from e
            if not isinstance(raw_data, list):
                raise DataSourceError(f"Data file {self.location} must hold a list of questions")
            self._questions = group_by_category(raw_data)
            logging.info(f"Loaded {len(raw_data)} questions in {len(self._questions)} "
                         f"categories from {self.location}")
        return self._questions

    async def list_categories(self) -> List[Category]:
        grouped = await self.load()
        return [
            Category(name=name, display_name=name or UNCATEGORIZED, question_count=len(questions))
            for name, questions in grouped.items()
        ]

    async def start_quiz(self, category_name: str, count: int = QUESTIONS_PER_QUIZ) -> List[Question]:
        grouped = await self.load()
        return sample_questions(grouped.get(category_name, []), count, self.rng)

    async def submit_quiz(self, answers: Dict[str, str], questions: Sequence[Question]) -> ResultSummary:
        result = score_quiz(questions, answers)
        logging.info(f"Quiz scored locally: {result.score}/{result.total}")
        return result
