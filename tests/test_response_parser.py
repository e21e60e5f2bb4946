"""
Tests for best-effort extraction of score, feedback and ideal answer from evaluator text.
"""

from voice_interview.application.utils.response_parser import (
    extract_feedback,
    extract_ideal_answer,
    extract_score,
    parse_evaluation,
)
from voice_interview.domain.entities.evaluation import EvaluationResult


def test_parses_well_formed_evaluation():
    text = "Score: 8/10\nFeedback: Good use of examples\nIdeal Answer: Use a hash map for O(1) lookup"

    result = parse_evaluation(text)

    assert result == EvaluationResult(
        score=8,
        feedback="Good use of examples",
        correct_answer="Use a hash map for O(1) lookup",
    )


def test_empty_text_yields_full_default_set():
    result = parse_evaluation("")

    assert result.score == 0
    assert result.feedback == "No feedback provided"
    assert result.correct_answer == "No ideal answer available"


def test_none_is_treated_as_empty_text():
    assert parse_evaluation(None) == parse_evaluation("")


def test_decimal_score_with_spaced_denominator():
    assert extract_score("Overall score: 7.5 / 10") == 7.5


def test_labels_are_case_insensitive():
    text = "SCORE 6\nFEEDBACK: Too brief\nIDEAL ANSWER - mention indexes"

    result = parse_evaluation(text)

    assert result.score == 6
    assert result.feedback == "Too brief"
    assert result.correct_answer == "- mention indexes"


def test_first_numeral_wins_even_when_unlabelled():
    """Extraction is best-effort: the first numeral in the text is taken as the score."""
    assert extract_score("Question 2 was answered well. Score: 9/10") == 2


def test_fields_are_order_independent():
    text = "Ideal Answer: Use a queue\nFeedback: Missed edge cases\nScore: 4/10"

    result = parse_evaluation(text)

    assert result.score == 4
    assert result.feedback == "Missed edge cases"
    assert result.correct_answer == "Use a queue"


def test_feedback_runs_to_end_of_text_without_newline():
    assert extract_feedback("Feedback: Solid reasoning overall") == "Solid reasoning overall"


def test_empty_feedback_value_falls_back_to_default():
    result = parse_evaluation("Score: 3/10\nFeedback:\nIdeal Answer: Explain TCP handshake")

    assert result.feedback == "No feedback provided"
    assert result.correct_answer == "Explain TCP handshake"


def test_missing_ideal_answer_keeps_other_fields():
    result = parse_evaluation("Score: 9/10\nFeedback: Excellent")

    assert result.score == 9
    assert result.feedback == "Excellent"
    assert result.correct_answer == "No ideal answer available"


def test_helpers_return_empty_string_on_miss():
    assert extract_feedback("nothing useful here") == ""
    assert extract_ideal_answer("nothing useful here") == ""
    assert extract_score("no digits at all") == 0


def test_prose_without_any_labels_never_raises():
    result = parse_evaluation("The candidate seemed nervous but knowledgeable.")

    assert result == EvaluationResult()
