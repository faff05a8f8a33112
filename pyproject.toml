[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zkinfer"
version = "0.1.0"
description = "Compile integer neural networks into arithmetic circuits and R1CS constraint systems for verifiable inference"
requires-python = ">=3.10"
dependencies = []
keywords = ["r1cs", "zero-knowledge", "arithmetic-circuit", "neural-network", "verifiable-computation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zkinfer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
