# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause
import shutil
from contextlib import suppress
from pathlib import Path

import nox

# Sessions run by default if nox is called without further arguments.
nox.options.sessions = ["dev_test"]

test_deps = ["pytest"]
coverage_deps = ["coverage", "pytest-cov"]

dev_deps = [
    "black",
    "isort",
    "mypy",
    "pre-commit",
    "nox",
    "flake8",
]

#
# Development pipeline
#
# - Install speccov in editable mode, the pytest plugin is loaded through its entry point.
# - Run tests, collecting coverage of speccov itself with pytest-cov.
#


@nox.session
def dev_test(session: nox.Session) -> None:
    """Run all tests against a development version of speccov."""

    session.run("pip", "install", *test_deps, *coverage_deps)
    session.run("pip", "install", "-e", ".")

    # Remove a potentially existing coverage file from a previous run.
    coverage_file = Path(".cov.test")
    with suppress(FileNotFoundError):
        coverage_file.unlink()

    session.log("Running tests with pytest")
    session.run(
        "pytest",
        "-v",
        "--cov=speccov",
        "--cov-branch",
        "--cov-report=term",
        *session.posargs,
    )

    session.log("All tests passed!")

    Path(".coverage").rename(coverage_file)

    session.log(f"Stored Python coverage for this test run in {coverage_file}.")


@nox.session
def dev_lint(session: nox.Session) -> None:
    """Check formatting and types."""
    session.run("pip", "install", *dev_deps)
    session.run("pip", "install", "-e", ".")

    session.run("black", "--check", "src", "tests", "noxfile.py", "setup.py")
    session.run("isort", "--check-only", "src", "tests")
    session.run("flake8", "--max-line-length=120", "src", "tests")
    session.run("mypy", "src")


#
# Release pipeline.
#
# - Clean out the dist directory.
# - Build sdist and wheel.
# - Install speccov from the wheel and run tests against it.
#

# Directory containing the distribution artifacts (sdist and bdist).
dist_dir = "dist"


@nox.session
def release_clean(session: nox.Session) -> None:
    """Remove all build artifacts from the dist directory."""
    shutil.rmtree(dist_dir, ignore_errors=True)


@nox.session
def release_build(session: nox.Session) -> None:
    """Build a release (sdist and bdist)."""

    session.run("pip", "install", "build")

    session.log("Building source and binary distribution")
    session.run("python", "-m", "build", "--outdir", dist_dir, ".")

    session.log(f"Distributions built into {dist_dir!r}")


@nox.session
def release_test(session: nox.Session) -> None:
    """Run tests against speccov installed from the wheel."""

    wheels = list(Path(dist_dir).glob("pytest_speccov-*.whl"))
    if len(wheels) != 1:
        session.error(
            f"Expecting exactly one wheel in {dist_dir!r}, found {len(wheels)}. "
            f"Run the 'release_clean' and 'release_build' sessions first."
        )

    session.log("Installing speccov from wheel, dependencies from PyPi")
    session.run("pip", "install", str(wheels[0]))

    session.log("Installing test dependencies")
    session.run("pip", "install", *test_deps)

    session.run("pytest", "-v")

    session.log("All tests passed!")
