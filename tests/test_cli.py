import struct

import numpy as np
import pytest

from mnistnet import cli, config
from mnistnet.network import load_model


def _write_images(path, images):
    count = len(images)
    header = struct.pack(">4i", 2051, count, config.ROWS, config.COLS)
    path.write_bytes(header + np.asarray(images, dtype=np.uint8).tobytes())


def _write_labels(path, labels):
    header = struct.pack(">2i", 2049, len(labels))
    path.write_bytes(header + bytes(labels))


@pytest.fixture
def dataset_dir(tmp_path):
    rng = np.random.default_rng(7)
    train_images = rng.integers(0, 256, size=(4, config.SIZE))
    test_images = rng.integers(0, 256, size=(3, config.SIZE))
    _write_images(tmp_path / config.TRAIN_DATA, train_images)
    _write_labels(tmp_path / config.TRAIN_LABELS, [0, 1, 2, 3])
    _write_images(tmp_path / config.TEST_DATA, test_images)
    _write_labels(tmp_path / config.TEST_LABELS, [4, 5, 6])
    return tmp_path


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["train"], cli.Command.TRAIN),
        (["predict"], cli.Command.PREDICT),
        ([], None),
        (["train", "predict"], None),
        (["test"], None),
        (["TRAIN"], None),
    ],
)
def test_parse_command(argv, expected):
    assert cli.parse_command(argv) is expected


def test_usage_prints_text(capsys):
    assert cli.usage() == 0
    out = capsys.readouterr().out
    assert out.startswith("Usage: nnp [train|predict]")
    assert "model.bin" in out


def test_main_invalid_arguments_prints_usage(capsys):
    assert cli.main(["bogus"]) == 0
    assert "Usage: nnp" in capsys.readouterr().out


def test_train_saves_loadable_model(dataset_dir, capsys):
    elapsed = cli.train(dataset_dir)
    assert elapsed >= 0
    out = capsys.readouterr().out
    assert "Epoch 0" in out
    assert f"Epoch {config.EPOCHS - 1}" in out
    assert f"Trained in {elapsed} seconds" in out
    model = load_model(dataset_dir / config.MODEL_FILE)
    assert model.w1.shape == (config.SIZE, config.H1)
    assert np.all(np.isfinite(model.w1))


def test_predict_test_after_training(dataset_dir, capsys):
    cli.train(dataset_dir)
    capsys.readouterr()
    predictions = cli.predict_test(dataset_dir)
    assert len(predictions) == 3
    for digit, confidence in predictions:
        assert 0 <= digit < config.CLASSES
        assert 0.0 < confidence <= 1.0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert all(line.startswith("Predicted digit: ") for line in lines)
    digit, confidence = predictions[0]
    assert lines[0] == f"Predicted digit: {digit} (confidence {confidence:.2f})"


def test_predict_test_without_model_fails(dataset_dir):
    with pytest.raises(FileNotFoundError):
        cli.predict_test(dataset_dir)


def test_main_train_then_predict(dataset_dir, monkeypatch, capsys):
    monkeypatch.chdir(dataset_dir)
    assert cli.main(["train"]) == 0
    assert (dataset_dir / config.MODEL_FILE).exists()
    capsys.readouterr()
    assert cli.main(["predict"]) == 0
    assert capsys.readouterr().out.count("Predicted digit: ") == 3


def test_main_missing_data_reports_error(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert cli.main(["train"]) == 1
    assert "nnp:" in capsys.readouterr().err