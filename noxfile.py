"""Automation sessions for linting, type checking, and tests."""

from __future__ import annotations

import nox

PYTHON_VERSIONS = ["3.11", "3.12"]

# The Qt model tests run headless.
QT_ENV = {"QT_QPA_PLATFORM": "offscreen"}


def _install(session: nox.Session) -> None:
    session.install("uv")
    session.run("uv", "pip", "install", "-e", ".[dev]")


@nox.session(python=PYTHON_VERSIONS[0])
def lint(session: nox.Session) -> None:
    """Run Ruff lint checks."""
    _install(session)
    session.run("ruff", "check", "--fix", ".")
    session.run("ruff", "format", "--check", "src", "tests")


@nox.session(python=PYTHON_VERSIONS[0])
def typecheck(session: nox.Session) -> None:
    """Run static type checking."""
    _install(session)
    session.run("mypy", "src", "tests")
    session.run("pyright", "src", "tests")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run unit and integration tests with coverage."""
    _install(session)
    session.run(
        "pytest",
        "--cov=rrm",
        "--cov-report=term-missing",
        "--cov-report=xml",
        *session.posargs,
        env=QT_ENV,
    )


@nox.session(python=PYTHON_VERSIONS[0])
def smoke(session: nox.Session) -> None:
    """Check the console scripts start and print their help."""
    _install(session)
    session.run("rrm", "--help", silent=True)
    session.run("rrm-gui", "--help", silent=True, env=QT_ENV)
