"""Tests for structerr.bootstrap module."""

from __future__ import annotations

from pathlib import Path

import pytest

from structerr.bootstrap import configure, configure_from_environment
from structerr.core.config import CONFIG_ENV_VAR, Settings, get_settings
from structerr.core.result import Err, Ok
from structerr.scheduler import EventLoopScheduler, ManualScheduler, get_scheduler


class TestConfigure:
    def test_installs_settings_and_scheduler(self) -> None:
        previous = configure(Settings(inheritance_limit=4, scheduler="manual"))
        assert previous == Settings()
        assert get_settings().inheritance_limit == 4
        assert type(get_scheduler()) is ManualScheduler

    def test_event_loop_scheduler(self) -> None:
        configure(Settings(scheduler="event-loop"))
        assert type(get_scheduler()) is EventLoopScheduler


class TestConfigureFromEnvironment:
    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        result = configure_from_environment(tmp_path)
        assert result == Ok(Settings())

    def test_loads_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        (tmp_path / "structerr.toml").write_text("[structerr]\ninheritance_limit = 2\n")

        result = configure_from_environment(tmp_path)
        assert isinstance(result, Ok)
        assert get_settings().inheritance_limit == 2

    def test_invalid_file_changes_nothing(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        bad = tmp_path / "bad.toml"
        bad.write_text("[structerr]\nscheduler = 'threads'\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(bad))
        before = get_scheduler()

        result = configure_from_environment(tmp_path)
        assert isinstance(result, Err)
        assert get_settings() == Settings()
        assert get_scheduler() is before
