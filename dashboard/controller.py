"""
View-State Controller
=====================

Owns everything the screens need: which view is shown, the category list, the
active quiz session and the last result. Each public method handles one user
action to completion and returns whether it succeeded.

Failures never escape to the UI. They are logged and turned into either an
inline ``load_error`` (category list) or a one-shot ``alert`` message.
"""

import asyncio
import logging
from enum import Enum
from typing import List, Optional

from datasource.base import QUESTIONS_PER_QUIZ, DataSourceError, QuizDataSource
from dashboard.session import IncompleteSubmissionError, QuizError, QuizSession
from models.quiz_models import Category, QuestionId, ResultSummary

LOAD_ERROR_MESSAGE = "Failed to load quiz data. Check the data source settings and reload."
START_ERROR_MESSAGE = "Error starting quiz. Please try again."
EMPTY_CATEGORY_MESSAGE = "Category not found or no questions available."
SUBMIT_ERROR_MESSAGE = "Error submitting quiz. Please try again."


class View(str, Enum):
    HOME = "home"
    QUIZ = "quiz"
    RESULTS = "results"


class QuizController:
    def __init__(self, source: QuizDataSource, questions_per_quiz: int = QUESTIONS_PER_QUIZ):
        self.source = source
        self.questions_per_quiz = questions_per_quiz
        self.view = View.HOME
        self.categories: List[Category] = []
        self.load_error: Optional[str] = None
        self.selected_category: Optional[Category] = None
        self.session: Optional[QuizSession] = None
        self.result: Optional[ResultSummary] = None
        self.alert: Optional[str] = None

    def pop_alert(self) -> Optional[str]:
        alert, self.alert = self.alert, None
        return alert

    def load_categories(self) -> bool:
        try:
            self.categories = asyncio.run(self.source.list_categories())
            self.load_error = None
            return True
        except DataSourceError as e:
            logging.error(f"Error loading categories: {e}")
            self.categories = []
            self.load_error = LOAD_ERROR_MESSAGE
            return False

    def start_quiz(self, category: Category) -> bool:
        try:
            questions = asyncio.run(self.source.start_quiz(category.name, self.questions_per_quiz))
        except DataSourceError as e:
            logging.error(f"Error starting quiz: {e}")
            self.alert = START_ERROR_MESSAGE
            return False

        if not questions:
            logging.error(f"No questions available for category {category.name!r}")
            self.alert = EMPTY_CATEGORY_MESSAGE
            return False

        try:
            session = QuizSession(questions)
        except QuizError as e:
            logging.error(f"Error starting quiz: {e}")
            self.alert = START_ERROR_MESSAGE
            return False

        self.session = session
        self.selected_category = category
        self.result = None
        self.view = View.QUIZ
        return True

    def select_answer(self, question_id: QuestionId, option_key: str) -> None:
        if self.session is None:
            return
        self.session.record_answer(question_id, option_key)

    def go_next(self) -> bool:
        return self.session is not None and self.session.advance()

    def go_previous(self) -> bool:
        return self.session is not None and self.session.retreat()

    def submit_quiz(self) -> bool:
        if self.session is None:
            return False
        try:
            self.session.check_complete()
        except IncompleteSubmissionError as e:
            self.alert = str(e)
            return False

        try:
            self.result = asyncio.run(
                self.source.submit_quiz(dict(self.session.answers), self.session.questions))
        except DataSourceError as e:
            logging.error(f"Error submitting quiz: {e}")
            self.alert = SUBMIT_ERROR_MESSAGE
            return False

        self.view = View.RESULTS
        return True

    def reset_quiz(self) -> None:
        self.view = View.HOME
        self.session = None
        self.result = None
        self.selected_category = None
        self.alert = None
