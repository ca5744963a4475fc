"""Invoke tasks for credkit project."""

import shutil
from pathlib import Path

from invoke import task


@task
def install(c):
    """Create the virtual environment with test and dev extras."""
    print("🚀 Creating virtual environment using uv")
    c.run("uv sync --extra test --extra dev")


@task
def check(c):
    """Run static checks."""
    print("🚀 Checking lock file consistency with pyproject.toml")
    c.run("uv lock --locked")
    print("🚀 Static type checking: Running mypy")
    c.run("uv run mypy")
    print("🚀 Checking for obsolete dependencies: Running deptry")
    c.run("uv run deptry src")


@task
def test(c, verbose=False):
    """Test the code with pytest."""
    flags = " -vv" if verbose else ""
    c.run(f"uv run python -m pytest tests --cov --cov-config=pyproject.toml --cov-report=term-missing{flags}")


@task
def clean_build(c):
    """Clean build artifacts."""
    print("🚀 Removing build artifacts")
    shutil.rmtree(Path("dist"), ignore_errors=True)


@task(pre=[clean_build])
def build(c):
    """Build wheel file."""
    print("🚀 Creating wheel file")
    c.run("uvx --from build pyproject-build --installer uv")
