#!/usr/bin/env python
"""Еженедельная сводка активности в репозитории."""

import logging
import os
import sys
from datetime import date, datetime, timedelta, timezone

from github import Github
from pydantic import BaseModel, Field

from .fetcher import API_ERRORS

logger = logging.getLogger(__name__)

PERIOD_DAYS = 7


class DigestReport(BaseModel):
    """Счетчики активности за период. None означает, что счетчик получить не удалось."""

    repository: str = Field(description="Полное имя репозитория")
    period_start: date = Field(description="Начало периода")
    period_end: date = Field(description="Конец периода")
    prs_opened: int | None = Field(description="Открыто PR", default=None)
    prs_merged: int | None = Field(description="Слито PR", default=None)
    prs_closed: int | None = Field(description="Закрыто PR без слияния", default=None)
    issues_opened: int | None = Field(description="Открыто issue", default=None)

    def render(self) -> str:
        """Текст сводки."""

        def fmt(value: int | None) -> str:
            return "?" if value is None else str(value)

        return (
            "=== Weekly Digest ===\n"
            f"Period: {self.period_start.isoformat()} to {self.period_end.isoformat()}\n"
            "\n"
            f"PRs opened:  {fmt(self.prs_opened)}\n"
            f"PRs merged:  {fmt(self.prs_merged)}\n"
            f"PRs closed:  {fmt(self.prs_closed)}\n"
            f"Issues opened: {fmt(self.issues_opened)}\n"
            "\n"
            "=== END Weekly Digest ==="
        )


class WeeklyDigest:
    """Класс для подсчета активности в репозитории за неделю."""

    def __init__(self, github_token: str, repository: str):
        """Инициализация.

        :param github_token: Токен для доступа к GitHub API
        :param repository: Полное имя репозитория (owner/repo)
        """
        self.github = Github(github_token)
        self.repository = repository

    def count(self, query: str) -> int | None:
        """Количество результатов поиска или None при ошибке API."""
        try:
            return self.github.search_issues(f"repo:{self.repository} {query}").totalCount
        except API_ERRORS as e:
            logger.warning(f"Не удалось выполнить поиск '{query}': {e}")
            return None

    def collect(self, now: datetime | None = None) -> DigestReport:
        """Собрать сводку за последние 7 дней.

        :param now: Текущий момент, по умолчанию сейчас в UTC
        :return: Сводка
        """
        now = now or datetime.now(timezone.utc)
        since = now - timedelta(days=PERIOD_DAYS)
        stamp = since.strftime("%Y-%m-%dT%H:%M:%SZ")

        logger.info(f"Собираем сводку для {self.repository} с {stamp}")
        return DigestReport(
            repository=self.repository,
            period_start=since.date(),
            period_end=now.date(),
            prs_opened=self.count(f"is:pr created:>={stamp}"),
            prs_merged=self.count(f"is:pr is:merged merged:>={stamp}"),
            prs_closed=self.count(f"is:pr is:closed is:unmerged closed:>={stamp}"),
            issues_opened=self.count(f"is:issue created:>={stamp}"),
        )


def main() -> None:
    """Точка входа для запуска сводки из GitHub Actions."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    repository = os.environ.get("REPO") or os.environ.get("GITHUB_REPOSITORY")
    github_token = os.environ.get("GH_TOKEN") or os.environ.get("GITHUB_TOKEN")

    if not repository or not github_token:
        logger.error("Не заданы REPO и GH_TOKEN")
        print("::error::REPO and GH_TOKEN are required")
        sys.exit(1)

    report = WeeklyDigest(github_token, repository).collect()
    print(report.render())


if __name__ == "__main__":
    main()
