"""Dataset locations, network dimensions and training parameters."""

TRAIN_DATA = "train-images-idx3-ubyte"
TRAIN_LABELS = "train-labels-idx1-ubyte"
TEST_DATA = "t10k-images-idx3-ubyte"
TEST_LABELS = "t10k-labels-idx1-ubyte"

NUM_TRAIN = 60000
NUM_TEST = 10000
ROWS = 28
COLS = 28
SIZE = ROWS * COLS
CLASSES = 10
H1 = 256
H2 = 128
EPOCHS = 5
BATCH = 64

LR = 0.01

MODEL_FILE = "model.bin"