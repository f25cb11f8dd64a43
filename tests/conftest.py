"""Shared test configuration and fixtures for validate-pipelines tests."""

import asyncio
import tempfile
from pathlib import Path
from typing import Dict, List

import pytest

from validate_pipelines.domain_model.results import JobResult


@pytest.fixture
def sample_workflow():
    """Standard valid workflow for testing."""
    return """
name: CI/CD Pipeline

on:
  push:
    branches: [ main, develop ]
  pull_request:
    branches: [ main ]

jobs:
  test:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - name: Setup Node.js
        uses: actions/setup-node@v4
        with:
          node-version: '18'
          cache: 'npm'
      - run: npm ci
      - run: npm run test
      - run: npm run lint

  build:
    needs: test
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - run: npm ci
      - run: npm run build
      - name: Build Docker image
        run: docker build -t academic-workflow:latest .

  deploy:
    needs: build
    runs-on: ubuntu-latest
    if: github.ref == 'refs/heads/main'
    steps:
      - name: Deploy to production
        run: echo "Deploying to production"
"""


@pytest.fixture
def temp_workflow_file():
    """Create a temporary workflow file for testing."""
    created: List[Path] = []

    def _create_temp_file(content: str, suffix: str = ".yml") -> Path:
        temp_file = tempfile.NamedTemporaryFile(suffix=suffix, mode="w+", delete=False)
        temp_file.write(content)
        temp_file.close()
        path = Path(temp_file.name)
        created.append(path)
        return path

    yield _create_temp_file

    for path in created:
        path.unlink(missing_ok=True)


class RecordingRunner:
    """Async runner with scripted per-job outcomes.

    ``outcomes`` maps a label to a JobResult, an Exception to raise, or a
    ``(delay_seconds, JobResult)`` tuple. Unlisted labels succeed after no
    delay with duration 10.
    """

    def __init__(self, outcomes: Dict[str, object] = None) -> None:
        self.outcomes = outcomes or {}
        self.calls: List[str] = []
        self.finished: List[str] = []

    async def __call__(self, label, job):
        self.calls.append(label)
        outcome = self.outcomes.get(label, JobResult(success=True, duration=10))
        if isinstance(outcome, tuple):
            delay, outcome = outcome
            await asyncio.sleep(delay)
        self.finished.append(label)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def recording_runner():
    """Factory for RecordingRunner instances."""
    return RecordingRunner
