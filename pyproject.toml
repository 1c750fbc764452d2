[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mnistnet"
version = "0.1.0"
description = "A small feedforward neural network that trains on and classifies MNIST handwritten digits"
requires-python = ">=3.10"
keywords = ["mnist", "neural-network", "sgd", "classification", "digits", "idx"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
nnp = "mnistnet.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mnistnet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
