from pathlib import Path

import joblib
import pytest

from areacount.analyzer import AreaCounter
from areacount.exceptions import InvalidArgumentError, ModelError, NotFoundError
from areacount.features import ImageFeatures
from areacount.regression import GradientBoostingBackend, ModelArtifact, ModelTrainer


def _features(n: float) -> ImageFeatures:
    return ImageFeatures(
        contour_count=n,
        avg_contour_area=1000.0 * n,
        std_contour_area=10.0 * n,
        edge_density=0.01 * n,
        avg_rect_aspect_ratio=1.0,
    )


def test_train_rejects_empty_records() -> None:
    with pytest.raises(InvalidArgumentError):
        GradientBoostingBackend().train([])


def test_trainer_rejects_empty_training_data(tmp_path: Path) -> None:
    with pytest.raises(InvalidArgumentError):
        ModelTrainer().train_and_save([], str(tmp_path / "m.joblib"))
    assert not (tmp_path / "m.joblib").exists()


def test_backend_learns_monotone_relation() -> None:
    backend = GradientBoostingBackend()
    records = [(_features(n), float(n)) for n in range(1, 11)]
    artifact = backend.train(records)
    assert isinstance(artifact, ModelArtifact)
    assert artifact.n_samples == 10
    assert backend.predict(_features(2), artifact) < backend.predict(_features(9), artifact)


def test_training_is_deterministic() -> None:
    records = [(_features(n), float(n)) for n in range(1, 8)]
    a = GradientBoostingBackend().train(records)
    b = GradientBoostingBackend().train(records)
    probe = _features(4.5)
    assert GradientBoostingBackend().predict(probe, a) == pytest.approx(
        GradientBoostingBackend().predict(probe, b)
    )


def test_train_then_predict_single_record(make_image, tmp_path: Path) -> None:
    image = str(make_image(boxes=[(20, 20, 60, 60), (110, 110, 60, 60)]))
    model = str(tmp_path / "model.joblib")

    trainer = ModelTrainer()
    trainer.train_and_save([(image, 2.0)], model)
    assert Path(model).exists()

    prediction = trainer.predict_area_count(image, model)
    assert prediction >= 0
    assert prediction == pytest.approx(2.0)


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    backend = GradientBoostingBackend()
    artifact = backend.train([(_features(n), float(n)) for n in range(1, 5)])
    path = str(tmp_path / "nested" / "model.joblib")
    backend.save(artifact, path)
    loaded = backend.load(path)
    assert backend.predict(_features(3), loaded) == pytest.approx(backend.predict(_features(3), artifact))


def test_load_missing_model(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        GradientBoostingBackend().load(str(tmp_path / "absent.joblib"))


def test_load_foreign_object_raises_model_error(tmp_path: Path) -> None:
    path = tmp_path / "foreign.joblib"
    joblib.dump({"not": "a model"}, str(path))
    with pytest.raises(ModelError):
        GradientBoostingBackend().load(str(path))


def test_counter_train_checks_lengths(make_image, tmp_path: Path) -> None:
    image = str(make_image())
    counter = AreaCounter()
    with pytest.raises(InvalidArgumentError):
        counter.train([image, image], [1.0], str(tmp_path / "m.joblib"))
    with pytest.raises(InvalidArgumentError):
        counter.train([], [], str(tmp_path / "m.joblib"))


def test_counter_train_and_predict(make_image, tmp_path: Path) -> None:
    one = str(make_image("one.png", boxes=[(50, 50, 100, 100)]))
    three = str(make_image("three.png", size=(400, 200),
                           boxes=[(20, 20, 80, 80), (150, 20, 80, 80), (280, 20, 80, 80)]))
    model = str(tmp_path / "m.joblib")

    counter = AreaCounter()
    counter.train([one, three], [1, 3], model)
    assert counter.predict(one, model) == pytest.approx(1.0, abs=0.5)
    assert counter.predict(three, model) == pytest.approx(3.0, abs=0.5)


def test_predict_on_missing_image_raises(make_image, tmp_path: Path) -> None:
    image = str(make_image())
    model = str(tmp_path / "m.joblib")
    ModelTrainer().train_and_save([(image, 0.0)], model)
    with pytest.raises(NotFoundError):
        ModelTrainer().predict_area_count(str(tmp_path / "gone.png"), model)
