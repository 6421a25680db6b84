import unittest

from datasource.base import DataSourceError
from datasource.parser import (parse_categories, parse_correct_flag, parse_question_record,
                               parse_questions, parse_result_summary)
from save_mock_data import mock_records


class CorrectFlagTests(unittest.TestCase):
    def test_service_tokens(self) -> None:
        self.assertIs(parse_correct_flag("True"), True)
        self.assertIs(parse_correct_flag("False"), False)

    def test_booleans_pass_through(self) -> None:
        self.assertIs(parse_correct_flag(True), True)
        self.assertIs(parse_correct_flag(False), False)

    def test_other_values_are_rejected(self) -> None:
        for value in ("true", "FALSE", "yes", 1, None, ["True"]):
            with self.assertRaises(DataSourceError):
                parse_correct_flag(value)


class ServicePayloadTests(unittest.TestCase):
    def test_categories(self) -> None:
        categories = parse_categories([
            {"name": "python", "display_name": "Python", "question_count": "12"},
        ])
        self.assertEqual(categories[0].name, "python")
        self.assertEqual(categories[0].display_name, "Python")
        self.assertEqual(categories[0].question_count, 12)

    def test_categories_must_be_a_list(self) -> None:
        with self.assertRaises(DataSourceError):
            parse_categories({"name": "python"})

    def test_questions_have_no_correct_key(self) -> None:
        questions = parse_questions([{
            "q_id": 7, "question_text": "2 + 2?",
            "option_a": "3", "option_b": "4", "option_c": "5", "option_d": "22",
            "correct_key": "B",
        }])
        self.assertEqual(questions[0].id, 7)
        self.assertEqual(questions[0].option("B"), "4")
        self.assertIsNone(questions[0].correct_key)

    def test_question_missing_option(self) -> None:
        with self.assertRaises(DataSourceError):
            parse_questions([{"q_id": 1, "question_text": "?", "option_a": "x"}])

    def test_result_summary(self) -> None:
        result = parse_result_summary({
            "score": 1,
            "total": 2,
            "details": [
                {"question_text": "Q1", "user_answer": "A", "correct_answer": "A", "is_correct": "True"},
                {"question_text": "Q2", "user_answer": None, "correct_answer": "C", "is_correct": "False"},
            ],
        })
        self.assertEqual((result.score, result.total), (1, 2))
        self.assertTrue(result.details[0].is_correct)
        self.assertFalse(result.details[1].is_correct)
        self.assertEqual(result.details[1].user_answer, "")

    def test_result_summary_must_agree_with_details(self) -> None:
        wrong_detail = {"question_text": "Q1", "user_answer": "B", "correct_answer": "A", "is_correct": "False"}
        for score, total in ((2, 5), (1, 1), (-1, 1), (2, 1)):
            with self.subTest(score=score, total=total):
                with self.assertRaises(DataSourceError):
                    parse_result_summary({"score": score, "total": total, "details": [wrong_detail]})

    def test_duplicate_question_ids(self) -> None:
        item = {"q_id": 1, "question_text": "?", "option_a": "a", "option_b": "b",
                "option_c": "c", "option_d": "d"}
        with self.assertRaises(DataSourceError):
            parse_questions([item, dict(item, q_id="1")])

    def test_question_id_type(self) -> None:
        item = {"q_id": True, "question_text": "?", "option_a": "a", "option_b": "b",
                "option_c": "c", "option_d": "d"}
        with self.assertRaises(DataSourceError):
            parse_questions([item])

    def test_result_summary_with_bad_flag(self) -> None:
        with self.assertRaises(DataSourceError):
            parse_result_summary({
                "score": 0, "total": 1,
                "details": [{"question_text": "Q", "correct_answer": "A", "is_correct": "maybe"}],
            })


class RecordTests(unittest.TestCase):
    def test_record(self) -> None:
        category, question = parse_question_record(mock_records[0])
        self.assertEqual(category, "python")
        self.assertEqual(question.id, 100)
        self.assertEqual(question.correct_key, "A")
        self.assertEqual([key for key, _ in question.options()], ["A", "B", "C", "D"])

    def test_field_names_are_case_sensitive(self) -> None:
        record = dict(mock_records[0])
        record["category"] = record.pop("Category")
        with self.assertRaises(DataSourceError):
            parse_question_record(record)

    def test_invalid_correct_key(self) -> None:
        record = dict(mock_records[0], Correct_Key="E")
        with self.assertRaises(DataSourceError):
            parse_question_record(record)


if __name__ == "__main__":
    unittest.main()
