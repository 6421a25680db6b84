"""
Payload Parser Module
=====================

This module turns the JSON documents handed over by the data sources into the
quiz models. It understands two shapes:

* the quiz service payloads (``q_id``, ``question_text``, ``option_a`` ...), and
* the static data file records (``Category``, ``Q_ID``, ``Question_Text`` ...),
  whose field names are matched case-sensitively.
"""

from typing import Any, Dict, List, Tuple

from datasource.base import DataSourceError
from models.quiz_models import OPTION_KEYS, Category, Question, ResultDetail, ResultSummary

RECORD_FIELDS = ("Category", "Q_ID", "Question_Text",
                 "Option_A", "Option_B", "Option_C", "Option_D", "Correct_Key")

# The quiz service sends correctness as text
CORRECT_TOKENS = {"True": True, "False": False}


def _require(payload: Any, *names: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise DataSourceError(f"Expected an object, got {type(payload).__name__}")
    missing = [name for name in names if name not in payload]
    if missing:
        raise DataSourceError(f"Missing field(s): {', '.join(missing)}")
    return payload


def _require_list(payload: Any, what: str) -> List[Any]:
    if not isinstance(payload, list):
        raise DataSourceError(f"Expected a list of {what}, got {type(payload).__name__}")
    return payload


def _check_question_id(value: Any) -> None:
    # bool is an int subclass but never a valid id
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise DataSourceError(f"Invalid question id: {value!r}")


def parse_correct_flag(value: Any) -> bool:
    """
    Maps the service's ``"True"``/``"False"`` tokens to a boolean.
    Real booleans are accepted too; any other value is rejected.
    """
    if isinstance(value, bool):
        return value
    try:
        return CORRECT_TOKENS[value]
    except (KeyError, TypeError):
        raise DataSourceError(f"Unexpected correctness flag: {value!r}") from None


def parse_categories(payload: Any) -> List[Category]:
    categories = []
    for item in _require_list(payload, "categories"):
        item = _require(item, "name", "display_name", "question_count")
        try:
            count = int(item["question_count"])
        except (TypeError, ValueError):
            raise DataSourceError(f"Invalid question count for {item['name']!r}") from None
        categories.append(Category(name=str(item["name"]),
                                   display_name=str(item["display_name"]),
                                   question_count=count))
    return categories


def parse_questions(payload: Any) -> List[Question]:
    questions = []
    seen_ids = set()
    for item in _require_list(payload, "questions"):
        item = _require(item, "q_id", "question_text", *(f"option_{k.lower()}" for k in OPTION_KEYS))
        _check_question_id(item["q_id"])
        if str(item["q_id"]) in seen_ids:
            raise DataSourceError(f"Duplicate question id {item['q_id']!r} in quiz")
        seen_ids.add(str(item["q_id"]))
        questions.append(Question(
            id=item["q_id"],
            text=item["question_text"],
            option_a=item["option_a"],
            option_b=item["option_b"],
            option_c=item["option_c"],
            option_d=item["option_d"],
        ))
    return questions


def parse_result_summary(payload: Any) -> ResultSummary:
    payload = _require(payload, "score", "total", "details")
    details = []
    for item in _require_list(payload["details"], "result details"):
        item = _require(item, "question_text", "correct_answer", "is_correct")
        details.append(ResultDetail(
            question_text=item["question_text"],
            user_answer=item.get("user_answer") or "",
            correct_answer=item["correct_answer"],
            is_correct=parse_correct_flag(item["is_correct"]),
            question_id=item.get("q_id"),
        ))
    try:
        score, total = int(payload["score"]), int(payload["total"])
    except (TypeError, ValueError):
        raise DataSourceError("Invalid score or total in quiz result") from None
    if total != len(details):
        raise DataSourceError(f"Quiz result total {total} does not match its {len(details)} details")
    if not 0 <= score <= total:
        raise DataSourceError(f"Quiz result score {score} is outside 0..{total}")
    correct = sum(d.is_correct for d in details)
    if score != correct:
        raise DataSourceError(f"Quiz result score {score} does not match {correct} correct details")
    return ResultSummary(score=score, total=total, details=details)


def parse_question_record(record: Any) -> Tuple[str, Question]:
    """Parses one static data file record into its category name and question."""
    record = _require(record, *RECORD_FIELDS)
    category = record["Category"]
    if category is not None and not isinstance(category, str):
        raise DataSourceError(f"Question {record['Q_ID']!r} has invalid Category {category!r}")
    _check_question_id(record["Q_ID"])
    correct_key = record["Correct_Key"]
    if correct_key not in OPTION_KEYS:
        raise DataSourceError(f"Question {record['Q_ID']!r} has invalid Correct_Key {correct_key!r}")
    question = Question(
        id=record["Q_ID"],
        text=record["Question_Text"],
        option_a=record["Option_A"],
        option_b=record["Option_B"],
        option_c=record["Option_C"],
        option_d=record["Option_D"],
        correct_key=correct_key,
    )
    return category or "", question
