"""Настройки запуска из переменных окружения."""

import json
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

from .duplicates import DEFAULT_THRESHOLD


def first_env(environ: Mapping[str, str], *names: str) -> str | None:
    """Вернуть первое непустое значение из переданных переменных."""
    for name in names:
        value = environ.get(name)
        if value:
            return value
    return None


def pr_number_from_event(environ: Mapping[str, str]) -> int | None:
    """Достать номер PR из файла события GitHub, если он есть.

    :param environ: Переменные окружения
    :return: Номер PR или None
    """
    event_path = environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        return None

    event_file = Path(event_path)
    if not event_file.exists():
        return None

    with event_file.open("r", encoding="utf-8") as f:
        event = json.load(f)

    if "pull_request" in event:
        return event["pull_request"]["number"]
    if event.get("issue", {}).get("pull_request"):
        return event["issue"]["number"]
    return None


class TriageSettings(BaseModel):
    """Параметры триажа."""

    pr_number: int = Field(description="Номер PR", gt=0)
    repository: str = Field(description="Полное имя репозитория (owner/repo)", pattern=r"^[^/\s]+/[^/\s]+$")
    github_token: str = Field(description="Токен для доступа к GitHub API", repr=False)
    duplicate_threshold: int = Field(description="Порог пересечения файлов в процентах", default=DEFAULT_THRESHOLD, ge=0, le=100)
    enable_labels: bool = Field(description="Применять метки", default=True)
    enable_duplicate_check: bool = Field(description="Искать дубликаты", default=True)
    enable_contributor_profile: bool = Field(description="Строить профиль автора", default=True)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "TriageSettings":
        """Собрать настройки из окружения GitHub Actions.

        :param environ: Переменные окружения, по умолчанию ``os.environ``
        :return: Настройки
        :raises ValueError: Если не хватает обязательных параметров или значения некорректны
        """
        env = os.environ if environ is None else environ

        pr_number: int | str | None = first_env(env, "PR_NUMBER", "INPUT_PR_NUMBER") or pr_number_from_event(env)
        repository = first_env(env, "REPO", "INPUT_REPO", "GITHUB_REPOSITORY")
        github_token = first_env(env, "GH_TOKEN", "INPUT_GITHUB_TOKEN", "GITHUB_TOKEN")

        if not pr_number:
            raise ValueError("PR_NUMBER не найден. Установите PR_NUMBER или запустите на событии pull_request")
        if not repository:
            raise ValueError("REPO не найден. Установите REPO или GITHUB_REPOSITORY")
        if not github_token:
            raise ValueError("GitHub токен не найден. Установите GH_TOKEN или передайте github_token")

        raw: dict[str, object] = {
            "pr_number": pr_number,
            "repository": repository,
            "github_token": github_token,
        }
        optional = {
            "duplicate_threshold": ("DUPLICATE_THRESHOLD", "INPUT_DUPLICATE_THRESHOLD"),
            "enable_labels": ("ENABLE_LABELS", "INPUT_ENABLE_LABELS"),
            "enable_duplicate_check": ("ENABLE_DUPLICATE_CHECK", "INPUT_ENABLE_DUPLICATE_CHECK"),
            "enable_contributor_profile": ("ENABLE_CONTRIBUTOR_PROFILE", "INPUT_ENABLE_CONTRIBUTOR_PROFILE"),
        }
        for field, names in optional.items():
            value = first_env(env, *names)
            if value is not None:
                raw[field] = value.strip()

        return cls.model_validate(raw)
