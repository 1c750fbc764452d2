"""A small feedforward neural network for MNIST digit classification: IDX loading, SGD training, model files and the nnp command."""

__version__ = "0.1.0"
__all__ = ["config", "loader", "network", "cli"]