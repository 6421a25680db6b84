import json
import os
import random
import tempfile
import unittest

import httpx

from datasource.base import DataSourceError
from datasource.local_source import LocalQuizSource, sample_questions
from save_mock_data import mock_records, save_data


class LocalQuizSourceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "quiz_data.json")
        save_data(mock_records, self.path)
        self.source = LocalQuizSource(self.path, rng=random.Random(42))

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    async def test_categories_are_grouped_in_file_order(self) -> None:
        categories = await self.source.list_categories()
        self.assertEqual([c.name for c in categories], ["python", "sql", ""])
        self.assertEqual([c.question_count for c in categories], [12, 3, 1])
        self.assertEqual(categories[2].display_name, "Uncategorized")

    async def test_quiz_is_sampled_from_one_category(self) -> None:
        questions = await self.source.start_quiz("python")
        self.assertEqual(len(questions), 10)
        self.assertEqual(len({q.id for q in questions}), 10)
        python_ids = {r["Q_ID"] for r in mock_records if r["Category"] == "python"}
        self.assertTrue({q.id for q in questions} <= python_ids)

    async def test_small_category_returns_everything(self) -> None:
        questions = await self.source.start_quiz("sql", count=10)
        self.assertEqual(sorted(q.id for q in questions), [200, 201, 202])

    async def test_unknown_category_is_empty(self) -> None:
        self.assertEqual(await self.source.start_quiz("cobol"), [])

    async def test_data_file_is_loaded_once(self) -> None:
        await self.source.list_categories()
        os.remove(self.path)
        questions = await self.source.start_quiz("sql")
        self.assertEqual(len(questions), 3)

    async def test_sampling_leaves_the_loaded_order_alone(self) -> None:
        grouped = await self.source.load()
        before = list(grouped["python"])
        await self.source.start_quiz("python")
        await self.source.start_quiz("python")
        self.assertEqual(grouped["python"], before)

    async def test_submission_is_scored_locally(self) -> None:
        questions = await self.source.start_quiz("sql")
        answers = {q.answer_id: "A" for q in questions[:2]}
        result = await self.source.submit_quiz(answers, questions)
        self.assertEqual((result.score, result.total), (2, 3))

    async def test_missing_file(self) -> None:
        source = LocalQuizSource(os.path.join(self.tmpdir.name, "missing.json"))
        with self.assertRaises(DataSourceError):
            await source.list_categories()

    async def test_invalid_json(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertRaises(DataSourceError):
            await self.source.list_categories()

    async def test_top_level_must_be_a_list(self) -> None:
        save_data({"questions": mock_records}, self.path)
        with self.assertRaises(DataSourceError):
            await self.source.list_categories()

    async def test_file_that_is_not_utf8(self) -> None:
        with open(self.path, "wb") as f:
            f.write(b'[{"Category": "\xff"}]')
        with self.assertRaises(DataSourceError):
            await self.source.list_categories()

    async def test_category_must_be_text(self) -> None:
        save_data([dict(mock_records[0], Category=["python"])], self.path)
        with self.assertRaises(DataSourceError):
            await self.source.list_categories()

    async def test_null_category_is_uncategorized(self) -> None:
        save_data([dict(mock_records[0], Category=None)], self.path)
        categories = await self.source.list_categories()
        self.assertEqual([(c.name, c.display_name) for c in categories], [("", "Uncategorized")])

    async def test_question_id_must_be_text_or_number(self) -> None:
        save_data([dict(mock_records[0], Q_ID={"id": 1})], self.path)
        with self.assertRaises(DataSourceError):
            await self.source.list_categories()

    async def test_duplicate_question_ids(self) -> None:
        save_data([mock_records[0], dict(mock_records[1], Q_ID=mock_records[0]["Q_ID"])], self.path)
        with self.assertRaises(DataSourceError):
            await self.source.list_categories()

    async def test_data_file_over_http(self) -> None:
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, text=json.dumps(mock_records))

        source = LocalQuizSource("https://quiz.example/quiz_data.json",
                                 transport=httpx.MockTransport(handler))
        categories = await source.list_categories()
        await source.start_quiz("python")
        self.assertEqual(len(categories), 3)
        self.assertEqual(len(requests), 1)

    async def test_data_file_http_error(self) -> None:
        source = LocalQuizSource("https://quiz.example/quiz_data.json",
                                 transport=httpx.MockTransport(lambda request: httpx.Response(404)))
        with self.assertRaises(DataSourceError):
            await source.list_categories()


class SampleQuestionsTests(unittest.TestCase):
    def test_sample_without_replacement(self) -> None:
        pool = list(range(12))
        sample = sample_questions(pool, 10, random.Random(1))
        self.assertEqual(len(sample), 10)
        self.assertEqual(len(set(sample)), 10)
        self.assertEqual(pool, list(range(12)))

    def test_seeded_samples_repeat(self) -> None:
        pool = list(range(12))
        self.assertEqual(sample_questions(pool, 5, random.Random(7)),
                         sample_questions(pool, 5, random.Random(7)))


if __name__ == "__main__":
    unittest.main()
