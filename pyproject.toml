[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tictactoe-ai"
version = "0.1.0"
description = "Tic-tac-toe on a 4x4 board against negamax, MCTS and reinforcement-learning opponents"
requires-python = ">=3.10"
keywords = ["tic-tac-toe", "negamax", "mcts", "reinforcement-learning", "elo", "game"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
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
ttt = "tictactoe_ai.cli:main"
ttt-train = "tictactoe_ai.train:main"
ttt-elo = "tictactoe_ai.elo:main"

[tool.hatch.build.targets.wheel]
packages = ["tictactoe_ai"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
