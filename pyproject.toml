[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "limits"
version = "0.1.0"
description = "Tensor contraction, co- and contravariant index bookkeeping and small symbolic calculus building blocks"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "tensor",
    "contraction",
    "einsum",
    "covariant",
    "contravariant",
    "metric",
    "differentiation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
limits-func-check = "limits.func:main"
limits-tensor-demo = "limits.contraction:main"

[tool.hatch.build.targets.wheel]
packages = ["limits"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
