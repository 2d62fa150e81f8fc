"""
手势分类器测试（不加载模型）
Gesture Classifier Tests without model loading
"""
from types import SimpleNamespace

import numpy as np
import pytest

from rps_camera.game.gesture_recognition import (
    ClassifierFactory, YoloGestureClassifier, MediaPipeGestureClassifier
)
from rps_camera.game.gesture_recognition.yolo_classifier import normalize_label
from rps_camera.game.gesture_recognition.mediapipe_classifier import DELEGATE_GPU
from rps_camera.utils.exceptions import ClassifierException


def test_create_yolo_classifier():
    classifier = ClassifierFactory.create_classifier(
        "YOLO", model_path="weights.pt", confidence_threshold=0.7, device="cpu")

    assert isinstance(classifier, YoloGestureClassifier)
    assert classifier.model_path == "weights.pt"
    assert classifier.confidence_threshold == 0.7
    assert classifier.is_closed()


def test_create_mediapipe_classifier(tmp_path):
    classifier = ClassifierFactory.create_classifier(
        "mediapipe", models_dir=str(tmp_path), delegate="GPU")

    assert isinstance(classifier, MediaPipeGestureClassifier)
    assert classifier.model_path == tmp_path / "gesture_recognizer.task"
    assert classifier.delegate == DELEGATE_GPU
    assert classifier.is_closed()


def test_unknown_classifier_type():
    with pytest.raises(ValueError):
        ClassifierFactory.create_classifier("rknn")


def test_create_from_config_ignores_controller_keys():
    classifier = ClassifierFactory.create_from_config({
        'type': 'yolo',
        'model_path': None,
        'label_aliases': {'fist': 'rock'},
        'min_detection_confidence': 0.4,
    })
    assert isinstance(classifier, YoloGestureClassifier)
    assert classifier.min_detection_confidence == 0.4


def test_yolo_classify_before_setup_raises():
    classifier = YoloGestureClassifier(model_path="weights.pt")
    with pytest.raises(ClassifierException):
        classifier.classify(np.zeros((4, 4, 3), dtype=np.uint8))


@pytest.mark.parametrize("class_name, expected", [
    ("rock", "Rock"),
    ("Closed_Fist", "Rock"),
    ("open_palm", "Paper"),
    ("five", "Paper"),
    ("peace", "Scissors"),
    ("Scissors", "Scissors"),
    ("thumbs_up", "thumbs_up"),
])
def test_normalize_label(class_name, expected):
    assert normalize_label(class_name) == expected


class _FakeTensor:
    def __init__(self, values):
        self._values = np.array(values)

    def cpu(self):
        return self

    def numpy(self):
        return self._values


class _Boxes:
    def __init__(self, class_ids, confidences):
        self.conf = _FakeTensor(confidences)
        self.cls = _FakeTensor(class_ids)

    def __len__(self):
        return len(self.conf.numpy())


def _yolo_results(class_ids, confidences, names):
    return [SimpleNamespace(boxes=_Boxes(class_ids, confidences), names=names)]


def test_yolo_categories_keep_best_box_per_label():
    classifier = YoloGestureClassifier(confidence_threshold=0.5)
    names = {0: 'rock', 1: 'paper', 2: 'scissors'}
    results = _yolo_results([0, 1, 1, 2], [0.6, 0.7, 0.9, 0.3], names)

    categories = classifier._categories_from_results(results)

    assert categories == (("Paper", pytest.approx(0.9)), ("Rock", pytest.approx(0.6)))


def test_yolo_categories_without_detections():
    classifier = YoloGestureClassifier()
    assert classifier._categories_from_results([]) == ()
    assert classifier._categories_from_results(
        [SimpleNamespace(boxes=None, names={})]) == ()


def _category(name, score):
    return SimpleNamespace(category_name=name, score=score)


def test_mediapipe_result_uses_first_hand():
    result = SimpleNamespace(gestures=[
        [_category("Open_Palm", 0.4), _category("Victory", 0.8)],
        [_category("Closed_Fist", 0.99)],
    ])

    classification = MediaPipeGestureClassifier.to_classification(result, timestamp_ms=42)

    assert classification.categories == (("Scissors", pytest.approx(0.8)),
                                         ("Paper", pytest.approx(0.4)))
    assert classification.timestamp_ms == 42
    assert classification.top_label() == "Scissors"


def test_mediapipe_result_without_hands_is_empty():
    assert MediaPipeGestureClassifier.to_classification(SimpleNamespace(gestures=[])).is_empty()
    assert MediaPipeGestureClassifier.to_classification(SimpleNamespace(gestures=[[]])).is_empty()


def test_mediapipe_unmapped_labels_pass_through():
    result = SimpleNamespace(gestures=[[_category("Thumb_Up", 1.0000001)]])
    classification = MediaPipeGestureClassifier.to_classification(result)
    assert classification.categories == (("Thumb_Up", 1.0),)


def test_mediapipe_setup_without_model_file(tmp_path):
    classifier = MediaPipeGestureClassifier(model_path=str(tmp_path / "missing.task"))
    with pytest.raises(ClassifierException):
        classifier.setup()
    assert classifier.is_closed()


def test_classifier_info_before_setup(tmp_path):
    yolo_info = YoloGestureClassifier(model_path="weights.pt", device="cpu").get_info()
    assert yolo_info['type'] == 'YoloGestureClassifier'
    assert yolo_info['closed'] is True
    assert yolo_info['device'] == 'cpu'

    mp_info = MediaPipeGestureClassifier(models_dir=str(tmp_path)).get_info()
    assert mp_info['delegate'] == 'cpu'
    assert mp_info['model_path'].endswith("gesture_recognizer.task")


def test_yolo_backend_dependencies_declared():
    """YOLO 后端直接导入 torch，需要在包依赖中声明"""
    from pathlib import Path

    pyproject = (Path(__file__).resolve().parents[1] / "pyproject.toml").read_text(encoding="utf-8")
    dependencies = pyproject.split("dependencies = [", 1)[1].split("]", 1)[0]
    for name in ("ultralytics", "torch", "huggingface_hub"):
        assert f'"{name}"' in dependencies
