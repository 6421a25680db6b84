"""
Settings
========

The quiz service base URL comes from ``QUIZ_BACKEND_URL``. Without it the app
serves quizzes from the static data file.
"""

import os
from dataclasses import dataclass
from typing import Optional

from datasource.base import QUESTIONS_PER_QUIZ, QuizDataSource
from datasource.local_source import LocalQuizSource
from datasource.remote_source import RemoteQuizSource

SOURCE_REMOTE = "remote"
SOURCE_LOCAL = "local"

DEFAULT_DATA_FILE = "quiz_data.json"
HTTP_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    source: str
    backend_url: str
    data_file: str
    questions_per_quiz: int = QUESTIONS_PER_QUIZ
    timeout: float = HTTP_TIMEOUT


def load_settings(environ: Optional[dict] = None) -> Settings:
    environ = os.environ if environ is None else environ
    backend_url = environ.get("QUIZ_BACKEND_URL", "").strip()
    return Settings(
        source=SOURCE_REMOTE if backend_url else SOURCE_LOCAL,
        backend_url=backend_url,
        data_file=DEFAULT_DATA_FILE,
    )


def build_source(settings: Settings) -> QuizDataSource:
    if settings.source == SOURCE_REMOTE:
        if not settings.backend_url:
            raise ValueError("The remote data source needs a backend URL.")
        return RemoteQuizSource(settings.backend_url, timeout=settings.timeout)
    if settings.source == SOURCE_LOCAL:
        return LocalQuizSource(settings.data_file, timeout=settings.timeout)
    raise ValueError(f"Unknown data source: {settings.source!r}")
