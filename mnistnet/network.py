"""A two-hidden-layer perceptron for digit classification, trained with SGD."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, NamedTuple

import numpy as np

from mnistnet import config

_FLOAT = np.dtype("<f4")


def relu(x):
    """Rectified linear activation."""
    return np.maximum(np.asarray(x, dtype=np.float32), np.float32(0))


def drelu(y):
    """Derivative of ReLU expressed in terms of its output."""
    return np.where(np.asarray(y) > 0, np.float32(1), np.float32(0))


def softmax(z) -> np.ndarray:
    """Numerically stable softmax of a vector."""
    z = np.asarray(z, dtype=np.float32)
    exps = np.exp(z - z.max())
    return exps / exps.sum()


def init_weights(size: int, rng: np.random.Generator | None = None) -> np.ndarray:
    """Small uniform random values in [-0.05, 0.05)."""
    rng = rng if rng is not None else np.random.default_rng()
    return ((rng.random(size) - 0.5) * 0.1).astype(np.float32)


class Activations(NamedTuple):
    hidden1: np.ndarray
    hidden2: np.ndarray
    probabilities: np.ndarray


@dataclass
class Model:
    """Weights (input-major matrices) and biases of the three layers."""

    w1: np.ndarray
    b1: np.ndarray
    w2: np.ndarray
    b2: np.ndarray
    w3: np.ndarray
    b3: np.ndarray

    def __post_init__(self) -> None:
        shapes = {
            "w1": (config.SIZE, config.H1),
            "b1": (config.H1,),
            "w2": (config.H1, config.H2),
            "b2": (config.H2,),
            "w3": (config.H2, config.CLASSES),
            "b3": (config.CLASSES,),
        }
        for name, shape in shapes.items():
            value = np.array(getattr(self, name), dtype=np.float32).reshape(shape)
            setattr(self, name, value)

    def forward(self, x) -> Activations:
        """Run the network on one flattened image."""
        x = np.asarray(x, dtype=np.float32)
        hidden1 = relu(self.b1 + x @ self.w1)
        hidden2 = relu(self.b2 + hidden1 @ self.w2)
        probabilities = softmax(self.b3 + hidden2 @ self.w3)
        return Activations(hidden1, hidden2, probabilities)

    def predict(self, x) -> tuple[int, float]:
        """Return the most likely digit and its probability."""
        probabilities = self.forward(x).probabilities
        digit = int(np.argmax(probabilities))
        return digit, float(probabilities[digit])


def initial_model(rng: np.random.Generator | None = None) -> Model:
    """A model with freshly initialised random parameters."""
    rng = rng if rng is not None else np.random.default_rng()
    return Model(
        w1=init_weights(config.SIZE * config.H1, rng),
        b1=init_weights(config.H1, rng),
        w2=init_weights(config.H1 * config.H2, rng),
        b2=init_weights(config.H2, rng),
        w3=init_weights(config.H2 * config.CLASSES, rng),
        b3=init_weights(config.CLASSES, rng),
    )


def train_model(
    data,
    labels,
    epochs: int = config.EPOCHS,
    lr: float = config.LR,
    rng: np.random.Generator | None = None,
    log: Callable[[str], object] | None = print,
) -> Model:
    """Train a new model by per-sample gradient descent on cross-entropy."""
    data = np.asarray(data, dtype=np.float32)
    labels = np.asarray(labels, dtype=np.float32)
    if len(data) != len(labels):
        raise ValueError("data and labels differ in length")
    model = initial_model(rng)
    step = np.float32(lr)
    for epoch in range(epochs):
        for x, target in zip(data, labels):
            hidden1, hidden2, probabilities = model.forward(x)
            delta3 = target - probabilities
            delta2 = (model.w3 @ delta3) * drelu(hidden2)
            delta1 = (model.w2 @ delta2) * drelu(hidden1)

            model.w3 += step * np.outer(hidden2, delta3)
            model.b3 += step * delta3
            model.w2 += step * np.outer(hidden1, delta2)
            model.b2 += step * delta2
            model.w1 += step * np.outer(x, delta1)
            model.b1 += step * delta1
        if log is not None:
            log(f"Epoch {epoch}")
    return model


def _parameters(model: Model):
    return (model.w1, model.b1, model.w2, model.b2, model.w3, model.b3)


def save_model(model: Model, path=config.MODEL_FILE) -> None:
    """Write all parameters as consecutive 32-bit floats."""
    with Path(path).open("wb") as stream:
        for array in _parameters(model):
            stream.write(array.astype(_FLOAT).tobytes())


def load_model(path=config.MODEL_FILE) -> Model:
    """Read a model written by :func:`save_model`."""
    sizes = [
        config.SIZE * config.H1,
        config.H1,
        config.H1 * config.H2,
        config.H2,
        config.H2 * config.CLASSES,
        config.CLASSES,
    ]
    raw = Path(path).read_bytes()
    expected = sum(sizes) * _FLOAT.itemsize
    if len(raw) < expected:
        raise ValueError(f"{path}: expected {expected} bytes, found {len(raw)}")
    values = np.frombuffer(raw, dtype=_FLOAT, count=sum(sizes)).astype(np.float32)
    parts = np.split(values, np.cumsum(sizes)[:-1])
    return Model(*parts)