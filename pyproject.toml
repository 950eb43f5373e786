[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mflashstudio"
version = "0.1.4"
description = "Local-first tools for reading, editing and packaging .mflash flashcard decks."
requires-python = ">=3.11"
dependencies = [
    "pyyaml",
    "tomli-w",
]
keywords = ["flashcards", "mflash", "deck", "study", "language-learning"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mflashstudio"]

[tool.pytest.ini_options]
addopts = "-ra"
