"""
RemoteQuizSource Module (Async Version)
=======================================
Talks to the quiz service over HTTP using httpx.AsyncClient. Question selection
and scoring happen on the service; correct keys never reach this client.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from datasource.base import QUESTIONS_PER_QUIZ, DataSourceError, QuizDataSource
from datasource.parser import parse_categories, parse_questions, parse_result_summary
from models.quiz_models import Category, Question, ResultSummary


class RemoteQuizSource(QuizDataSource):
    def __init__(self, base_url: str, timeout: float = 60.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/api"
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        # A fresh client per call: each call runs in its own event loop
        return httpx.AsyncClient(
            headers={"Accept": "application/json"},
            follow_redirects=True,
            timeout=self.timeout,
            transport=self.transport,
        )

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.api_url}{path}"
        try:
            async with self._client() as client:
                resp = await client.request(method, url, json=payload)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as e:
            raise DataSourceError(f"{method} {url} returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise DataSourceError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise DataSourceError(f"{method} {url} returned invalid JSON") from e

    async def list_categories(self) -> List[Category]:
        categories = parse_categories(await self._request("GET", "/categories"))
        logging.info(f"Loaded {len(categories)} categories from {self.base_url}")
        return categories

    async def start_quiz(self, category_name: str, count: int = QUESTIONS_PER_QUIZ) -> List[Question]:
        # The service decides the set size; count is not part of its API
        payload = await self._request("POST", "/quiz/start", {"category": category_name})
        return parse_questions(payload)

    async def submit_quiz(self, answers: Dict[str, str], questions: Sequence[Question]) -> ResultSummary:
        submission = {
            "answers": {str(key): value for key, value in answers.items()},
            "question_ids": [q.id for q in questions],
        }
        result = parse_result_summary(await self._request("POST", "/quiz/submit", submission))
        logging.info(f"Quiz scored remotely: {result.score}/{result.total}")
        return result
