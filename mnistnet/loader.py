"""Loading of MNIST image and label files in the IDX format."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

import numpy as np

from mnistnet import config


@dataclass
class Dataset:
    """Normalised images and one-hot labels for training and testing."""

    train_data: np.ndarray
    train_labels: np.ndarray
    test_data: np.ndarray
    test_labels: np.ndarray


def _read_header(stream: BinaryIO, count: int, path: Path) -> tuple[int, ...]:
    raw = stream.read(4 * count)
    if len(raw) != 4 * count:
        raise ValueError(f"{path}: truncated header")
    return struct.unpack(f">{count}i", raw)


def _read_exact(stream: BinaryIO, size: int, path: Path) -> bytes:
    raw = stream.read(size)
    if len(raw) != size:
        raise ValueError(f"{path}: expected {size} bytes of data, found {len(raw)}")
    return raw


def load_data(path, num: int) -> np.ndarray:
    """Read up to ``num`` images, each flattened and scaled to [0, 1]."""
    path = Path(path)
    with path.open("rb") as stream:
        _magic, count, rows, cols = _read_header(stream, 4, path)
        if count < num and num != 0:
            num = count
        pixels = rows * cols
        raw = _read_exact(stream, num * pixels, path)
    images = np.frombuffer(raw, dtype=np.uint8).reshape(num, pixels)
    return images.astype(np.float32) / np.float32(255.0)


def load_labels(path, num: int, classes: int = config.CLASSES) -> np.ndarray:
    """Read up to ``num`` labels and return them one-hot encoded."""
    path = Path(path)
    with path.open("rb") as stream:
        _magic, count = _read_header(stream, 2, path)
        if count < num and num != 0:
            num = count
        raw = _read_exact(stream, count, path)
    values = np.frombuffer(raw, dtype=np.uint8)[:num]
    if values.size and int(values.max()) >= classes:
        raise ValueError(f"{path}: label {int(values.max())} outside {classes} classes")
    labels = np.zeros((num, classes), dtype=np.float32)
    labels[np.arange(num), values] = 1.0
    return labels


def load_dataset(directory=".") -> Dataset:
    """Load the training and test sets from ``directory``."""
    base = Path(directory)
    return Dataset(
        train_data=load_data(base / config.TRAIN_DATA, config.NUM_TRAIN),
        train_labels=load_labels(base / config.TRAIN_LABELS, config.NUM_TRAIN),
        test_data=load_data(base / config.TEST_DATA, config.NUM_TEST),
        test_labels=load_labels(base / config.TEST_LABELS, config.NUM_TEST),
    )