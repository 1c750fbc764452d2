# mnistnet

A small fully connected neural network for classifying MNIST handwritten
digits. It is trained with plain stochastic gradient descent and uses NumPy.

Network layout:

- input: 784 values (a 28×28 image, pixels scaled to `[0, 1]`)
- hidden layer 1: 256 units, ReLU
- hidden layer 2: 128 units, ReLU
- output: 10 units, softmax

By default, training runs 5 epochs over the training images and updates the
weights after every single image. The learning rate is 0.01 and the loss is
categorical cross-entropy. The starting weights and biases are uniform random
values in `[-0.05, 0.05)`.

## Installation

```
pip install .
```

## Data

Put the four standard MNIST IDX files in the working directory:

- `train-images-idx3-ubyte`
- `train-labels-idx1-ubyte`
- `t10k-images-idx3-ubyte`
- `t10k-labels-idx1-ubyte`

At most 60,000 training and 10,000 test images are read. If a file holds
fewer, all of them are used.

## Command line

Train a model and write it to `model.bin` in the working directory:

```
nnp train
```

After each epoch it prints `Epoch N`. At the end it prints
`Trained in N seconds`.

Classify each test image with the model in `model.bin`:

```
nnp predict
```

Each prediction prints one line, such as `Predicted digit: 7 (confidence 0.98)`.

Any other arguments, or none at all, print the usage text and exit with
status 0. A missing or malformed data or model file prints an `nnp: ...`
message on standard error and exits with status 1.

## Library use

```python
import numpy as np
from mnistnet.loader import load_dataset
from mnistnet.network import train_model, save_model, load_model

dataset = load_dataset(".")
model = train_model(dataset.train_data, dataset.train_labels,
                    epochs=1, lr=0.01, rng=np.random.default_rng(0), log=print)
save_model(model, "model.bin")

model = load_model("model.bin")
digit, confidence = model.predict(dataset.test_data[0])
```

- `mnistnet.loader`
  - `load_data(path, num)` reads one IDX image file.
  - `load_labels(path, num, classes)` reads one IDX label file and returns
    the labels one-hot encoded.
  - `load_dataset(directory)` loads all four files into a `Dataset`, which has
    the fields `train_data`, `train_labels`, `test_data` and `test_labels`.
- `mnistnet.network`
  - `Model` holds the weights `w1`, `w2` and `w3` and the biases `b1`, `b2`
    and `b3`. `Model.forward(x)` returns the activations of both hidden
    layers and the output probabilities. `Model.predict(x)` returns the most
    likely digit and its probability.
  - `initial_model(rng)` returns a model with random parameters.
  - `train_model(...)` creates a new model and trains it. Pass `log=None` to
    turn off the per-epoch messages.
  - `relu`, `drelu`, `softmax` and `init_weights` are also available as
    separate functions.
  - `save_model` and `load_model` write and read the parameters as
    consecutive little-endian 32-bit floats, in the order w1, b1, w2, b2, w3,
    b3.
- `mnistnet.config` holds the file names, layer sizes and training defaults.
- `mnistnet.cli` holds the `nnp` command. Its `train(directory)` and
  `predict_test(directory)` functions can also be called directly.

## What it does not do

- Training is per image only. `config.BATCH` is defined, but no mini-batches
  are used.
- `nnp predict` prints each prediction. It does not compare the predictions
  with the test labels or report accuracy.
- The command always uses the working directory for the data and for
  `model.bin`. It has no options.
- Everything runs on the CPU.

## Tests

```
pip install .[test]
pytest
```