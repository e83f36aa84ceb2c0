"""Nox sessions for the verification bot: tests, lint, formatting and a local run."""

import nox

nox.options.sessions = ["tests", "lint"]
PYTHON = "3.11"
PACKAGE = "verify_bot"


@nox.session(python=PYTHON)
def tests(session):
    """Run the test suite with coverage."""
    session.install("-e", ".[dev]")
    session.run(
        "pytest",
        f"--cov={PACKAGE}",
        "--cov-report=term-missing",
        "--cov-fail-under=85",
        "-v",
        *session.posargs,
    )


@nox.session(python=PYTHON)
def lint(session):
    """Run ruff lint and format checks."""
    session.install("ruff>=0.1.0")
    session.run("ruff", "check", PACKAGE, "tests", "noxfile.py")
    session.run("ruff", "format", "--check", PACKAGE, "tests", "noxfile.py")


@nox.session(python=PYTHON)
def format_code(session):
    """Format code with ruff."""
    session.install("ruff>=0.1.0")
    session.run("ruff", "format", PACKAGE, "tests", "noxfile.py")
    session.run("ruff", "check", "--fix", PACKAGE, "tests", "noxfile.py")


@nox.session(python=PYTHON)
def coverage_report(session):
    """Write HTML and XML branch-coverage reports."""
    session.install("-e", ".[dev]")
    session.run(
        "pytest",
        f"--cov={PACKAGE}",
        "--cov-branch",
        "--cov-report=html:htmlcov",
        "--cov-report=xml:coverage.xml",
        "--tb=short",
    )
    session.log("Coverage report generated in htmlcov/ directory")


@nox.session(python=PYTHON)
def test_single(session):
    """Run a single test file or test function."""
    if not session.posargs:
        session.error("Please provide a test file or function to run")

    session.install("-e", ".[dev]")
    session.run("pytest", "-v", *session.posargs)


@nox.session(python=PYTHON)
def run(session):
    """Start the bot locally; DISCORD_TOKEN must be set in the environment."""
    session.install("-e", ".")
    session.run("python", "-m", PACKAGE)
