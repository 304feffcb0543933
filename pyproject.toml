[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zbplugins"
version = "0.1.0"
description = "Framework-independent logic and SQLite storage for a set of chat-bot plugins: divination, tarot, sign-in scores, sleep tracking, quotations and more."
requires-python = ">=3.10"
dependencies = []
keywords = ["chatbot", "plugins", "tarot", "omikuji", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zbplugins"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
