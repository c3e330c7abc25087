from __future__ import annotations

from pathlib import Path

import pytest

from knr.core.config import Configuration
from knr.test.fakes import FakeTools


@pytest.fixture
def tools(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeTools:
    import knr.git.repository as repository_mod
    import knr.platform.runner as runner_mod
    import knr.services.newrelease.changelog as changelog_mod

    fake = FakeTools(root=tmp_path)
    monkeypatch.setattr(repository_mod, "run_process", fake.run)
    monkeypatch.setattr(changelog_mod, "run_process", fake.run)
    monkeypatch.setattr(runner_mod, "run_silent", fake.run_silent)
    return fake


@pytest.fixture
def config() -> Configuration:
    return Configuration(email="kernel.dev@canonical.com")
