"""
分类结果测试
Classification Result Tests
"""
import math

import pytest

from rps_camera.game.gesture_recognition import ClassificationResult, ClassifierError, ranked


def test_top_label_is_highest_confidence():
    result = ClassificationResult.of(("Rock", 0.1), ("Paper", 0.9))
    assert result.top_label() == "Paper"
    assert result.top_confidence() == pytest.approx(0.9)


def test_tie_goes_to_first_in_order():
    result = ClassificationResult.of(("Scissors", 0.5), ("Rock", 0.5))
    assert result.top_label() == "Scissors"


def test_empty_result():
    result = ClassificationResult.empty(timestamp_ms=10)
    assert result.is_empty()
    assert len(result) == 0
    assert result.top_label() is None
    assert result.top_confidence() == 0.0
    assert result.timestamp_ms == 10


@pytest.mark.parametrize("confidence", [-0.01, 1.01, math.nan])
def test_confidence_out_of_range_rejected(confidence):
    with pytest.raises(ValueError):
        ClassificationResult.of(("Rock", confidence))


def test_categories_are_normalized_to_tuples():
    result = ClassificationResult(categories=[["Rock", 1]])
    assert result.categories == (("Rock", 1.0),)
    assert list(result) == [("Rock", 1.0)]


def test_to_dict():
    result = ClassificationResult.of(("Paper", 0.75), timestamp_ms=5, inference_time_ms=3.5)
    assert result.to_dict() == {
        'categories': [{'label': 'Paper', 'confidence': 0.75}],
        'timestamp_ms': 5,
        'inference_time_ms': 3.5
    }


def test_ranked_is_stable_descending():
    pairs = [("a", 0.2), ("b", 0.8), ("c", 0.2), ("d", 0.9)]
    assert ranked(pairs) == (("d", 0.9), ("b", 0.8), ("a", 0.2), ("c", 0.2))


def test_classifier_error_str():
    error = ClassifierError("model missing", code=0)
    assert "model missing" in str(error)
    assert ClassifierError("x").code == 0
