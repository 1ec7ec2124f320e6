"""
Тесты для настроек запуска.
"""

import json
import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from pr_triage.config import TriageSettings, pr_number_from_event

BASE_ENV = {"PR_NUMBER": "12", "REPO": "owner/repo", "GH_TOKEN": "secret"}


class TestTriageSettings:
    """Тесты для TriageSettings.from_env."""

    def test_defaults(self) -> None:
        """Тест значений по умолчанию."""
        settings = TriageSettings.from_env(BASE_ENV)

        assert settings.pr_number == 12
        assert settings.repository == "owner/repo"
        assert settings.github_token == "secret"
        assert settings.duplicate_threshold == 50
        assert settings.enable_labels
        assert settings.enable_duplicate_check
        assert settings.enable_contributor_profile

    def test_token_hidden_in_repr(self) -> None:
        """Тест: токен не попадает в repr."""
        assert "secret" not in repr(TriageSettings.from_env(BASE_ENV))

    def test_action_inputs(self) -> None:
        """Тест переменных INPUT_* и fallback на переменные GitHub."""
        env = {
            "INPUT_PR_NUMBER": "7",
            "GITHUB_REPOSITORY": "org/project",
            "GITHUB_TOKEN": "gh",
            "INPUT_DUPLICATE_THRESHOLD": "75",
            "INPUT_ENABLE_LABELS": "false",
            "ENABLE_DUPLICATE_CHECK": "False",
        }

        settings = TriageSettings.from_env(env)

        assert settings.pr_number == 7
        assert settings.repository == "org/project"
        assert settings.github_token == "gh"
        assert settings.duplicate_threshold == 75
        assert not settings.enable_labels
        assert not settings.enable_duplicate_check
        assert settings.enable_contributor_profile

    @pytest.mark.parametrize(
        ("missing", "message"),
        [("PR_NUMBER", "PR_NUMBER не найден"), ("REPO", "REPO не найден"), ("GH_TOKEN", "токен не найден")],
    )
    def test_missing_required(self, missing: str, message: str) -> None:
        """Тест отсутствия обязательных параметров."""
        env = {k: v for k, v in BASE_ENV.items() if k != missing}

        with pytest.raises(ValueError, match=message):
            TriageSettings.from_env(env)

    def test_threshold_out_of_range(self) -> None:
        """Тест порога вне диапазона 0-100."""
        with pytest.raises(ValidationError):
            TriageSettings.from_env({**BASE_ENV, "DUPLICATE_THRESHOLD": "150"})

    def test_invalid_repository(self) -> None:
        """Тест некорректного имени репозитория."""
        with pytest.raises(ValidationError):
            TriageSettings.from_env({**BASE_ENV, "REPO": "just-a-name"})

    def test_pr_number_from_event(self) -> None:
        """Тест номера PR из файла события."""
        event_data = {"pull_request": {"number": 321}, "repository": {"full_name": "owner/repo"}}

        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump(event_data, f)
            temp_path = f.name

        try:
            env = {"GITHUB_EVENT_PATH": temp_path, "REPO": "owner/repo", "GH_TOKEN": "secret"}
            settings = TriageSettings.from_env(env)

            assert settings.pr_number == 321
        finally:
            Path(temp_path).unlink()


class TestPrNumberFromEvent:
    """Тесты для функции pr_number_from_event."""

    def test_no_event_path(self) -> None:
        """Тест без GITHUB_EVENT_PATH."""
        assert pr_number_from_event({}) is None

    def test_event_file_not_found(self) -> None:
        """Тест когда файл события не существует."""
        assert pr_number_from_event({"GITHUB_EVENT_PATH": "/nonexistent/path.json"}) is None

    def test_issue_comment_on_pr(self) -> None:
        """Тест события комментария к PR."""
        event_data = {"issue": {"number": 55, "pull_request": {"url": "https://api.github.com/repos/o/r/pulls/55"}}}

        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump(event_data, f)
            temp_path = f.name

        try:
            assert pr_number_from_event({"GITHUB_EVENT_PATH": temp_path}) == 55
        finally:
            Path(temp_path).unlink()

    def test_plain_issue_event(self) -> None:
        """Тест события обычного issue."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump({"issue": {"number": 9}}, f)
            temp_path = f.name

        try:
            assert pr_number_from_event({"GITHUB_EVENT_PATH": temp_path}) is None
        finally:
            Path(temp_path).unlink()
