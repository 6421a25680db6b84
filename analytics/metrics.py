"""
Scoring and Result Metrics Module
=================================

This module scores quiz attempts and derives the figures shown on the
results screen.
"""

from typing import Dict, Sequence

import pandas as pd

from models.quiz_models import Question, ResultDetail, ResultSummary

PASS_THRESHOLD = 70


def score_quiz(questions: Sequence[Question], answers: Dict[str, str]) -> ResultSummary:
    """
    Compares every answer with the question's correct key, in question order.
    Unanswered questions count as an empty answer and never match.
    """
    score = 0
    details = []

    for question in questions:
        user_answer = answers.get(question.answer_id, "")
        is_correct = user_answer == question.correct_key

        if is_correct:
            score += 1

        details.append(ResultDetail(
            question_text=question.text,
            user_answer=user_answer,
            correct_answer=question.correct_key or "",
            is_correct=is_correct,
            question_id=question.id,
        ))

    return ResultSummary(score=score, total=len(questions), details=details)


def percentage(result: ResultSummary) -> int:
    if not result.total:
        return 0
    return round(100 * result.score / result.total)


def is_passed(result: ResultSummary) -> bool:
    return percentage(result) >= PASS_THRESHOLD


def details_frame(result: ResultSummary) -> pd.DataFrame:
    """One row per question, in quiz order, for the detailed results table."""
    rows = [
        {
            "Question": detail.question_text,
            "Your Answer": detail.user_answer or "Not answered",
            "Correct Answer": detail.correct_answer,
            "Result": "Correct" if detail.is_correct else "Incorrect",
        }
        for detail in result.details
    ]
    df = pd.DataFrame(rows, columns=["Question", "Your Answer", "Correct Answer", "Result"])
    df.index = [f"Q{i + 1}" for i in range(len(df))]
    return df
