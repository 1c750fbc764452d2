"""Command-line entry point: train a model or predict on the test set."""

from __future__ import annotations

import enum
import sys
import time
from pathlib import Path

from mnistnet import config
from mnistnet.loader import load_dataset
from mnistnet.network import load_model, save_model, train_model

USAGE = (
    "Usage: nnp [train|predict]\n"
    "\tNote: predict requires a previously trained model in the directory "
    "named model.bin"
)


class Command(enum.Enum):
    """Actions selectable from the command line."""

    TRAIN = "train"
    PREDICT = "predict"


def parse_command(argv) -> Command | None:
    """Return the command named by a single argument, or None if invalid."""
    args = list(argv)
    if len(args) != 1:
        return None
    try:
        return Command(args[0])
    except ValueError:
        return None


def usage() -> int:
    """Print usage information."""
    print(USAGE)
    return 0


def train(directory=".") -> int:
    """Load the dataset, train a model, save it and report the time taken."""
    base = Path(directory)
    dataset = load_dataset(base)
    started = time.monotonic()
    model = train_model(dataset.train_data, dataset.train_labels)
    elapsed = int(time.monotonic() - started)
    save_model(model, base / config.MODEL_FILE)
    print(f"Trained in {elapsed} seconds")
    return elapsed


def predict_test(directory=".") -> list[tuple[int, float]]:
    """Load the dataset and a saved model, and predict every test image."""
    base = Path(directory)
    dataset = load_dataset(base)
    model = load_model(base / config.MODEL_FILE)
    predictions = []
    for image in dataset.test_data:
        digit, confidence = model.predict(image)
        print(f"Predicted digit: {digit} (confidence {confidence:.2f})")
        predictions.append((digit, confidence))
    return predictions


def main(argv=None) -> int:
    """Run the command given on the command line."""
    args = sys.argv[1:] if argv is None else argv
    command = parse_command(args)
    if command is None:
        return usage()
    try:
        if command is Command.TRAIN:
            train()
        else:
            predict_test()
    except (OSError, ValueError) as error:
        print(f"nnp: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())