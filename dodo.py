"""
Doit file to wrap development workflow commands.
"""

import shutil
from pathlib import Path

from doit.task import Task
from doit.tools import create_folder

PACKAGE = "trilium_cache"

# artifact output
OUT_PATH = Path("__out__")

# test coverage results
TESTS_PATH = OUT_PATH / "test"
JUNIT_PATH = TESTS_PATH / "junit.xml"
COV_PATH = TESTS_PATH / "cov"
COV_HTML_PATH = COV_PATH / "html"
COV_XML_PATH = COV_PATH / "coverage.xml"

# static analysis results
MYPY_HTML_PATH = OUT_PATH / "analysis" / "mypy"


def cleanup_dir(output_dir: Path):
    if output_dir.exists():
        shutil.rmtree(output_dir)


def task_pytest() -> Task:
    """
    Run pytest and generate coverage reports.
    """

    args = [
        "pytest",
        f"--cov={PACKAGE}",
        f"--cov-report=html:{COV_HTML_PATH}",
        f"--cov-report=xml:{COV_XML_PATH}",
        f"--junitxml={JUNIT_PATH}",
    ]

    return Task(
        "test",
        actions=[
            (create_folder, [COV_PATH]),
            " ".join(args),
        ],
        targets=[COV_XML_PATH, JUNIT_PATH],
        file_dep=[],
        clean=[(cleanup_dir, [TESTS_PATH])],
    )


def task_format() -> Task:
    """
    Run formatters.
    """

    return Task(
        "format",
        actions=[
            "autoflake --remove-all-unused-imports -i -r .",
            "isort .",
            "black .",
            "toml-sort -i pyproject.toml",
        ],
        targets=[],
        file_dep=[],
    )


def task_analysis() -> Task:
    """
    Run static analysis.
    """

    return Task(
        "analysis",
        actions=[f"mypy --html-report {MYPY_HTML_PATH} {PACKAGE}"],
        targets=[],
        file_dep=[],
    )
