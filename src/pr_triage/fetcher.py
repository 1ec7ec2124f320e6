"""Получение метаданных PR из GitHub API."""

import logging
from collections.abc import Iterable

import requests
from github import Github, GithubException
from github.PullRequest import PullRequest
from github.PullRequestReview import PullRequestReview
from github.Repository import Repository

from .duplicates import SIBLING_LIMIT
from .models import (
    AuthorHistory,
    Mergeable,
    MergeStateStatus,
    PullRequestSnapshot,
    ReviewDecision,
    SiblingPR,
)

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 100

# PyGithub не оборачивает сетевые ошибки requests в GithubException
API_ERRORS = (GithubException, requests.RequestException)


class FetchError(RuntimeError):
    """Не удалось получить основные метаданные PR."""


def to_mergeable(value: bool | None) -> Mergeable:
    """Преобразовать ``pr.mergeable`` из REST API в перечисление."""
    if value is None:
        return Mergeable.UNKNOWN
    return Mergeable.MERGEABLE if value else Mergeable.CONFLICTING


def to_merge_state_status(value: str | None) -> MergeStateStatus:
    """Преобразовать ``pr.mergeable_state`` из REST API в перечисление."""
    try:
        return MergeStateStatus((value or "").upper())
    except ValueError:
        return MergeStateStatus.UNKNOWN


def derive_review_decision(reviews: Iterable[PullRequestReview], has_pending_requests: bool) -> ReviewDecision:
    """Вычислить итоговое решение ревью по списку отзывов.

    Учитывается последний содержательный отзыв каждого ревьюера.

    :param reviews: Отзывы в хронологическом порядке
    :param has_pending_requests: Есть ли незакрытые запросы на ревью
    :return: Решение ревью
    """
    latest: dict[str, str] = {}
    for review in reviews:
        state = (review.state or "").upper()
        if state not in ("APPROVED", "CHANGES_REQUESTED", "DISMISSED"):
            continue
        reviewer = review.user.login if review.user else ""
        latest[reviewer] = state

    states = set(latest.values())
    if "CHANGES_REQUESTED" in states:
        return ReviewDecision.CHANGES_REQUESTED
    if "APPROVED" in states:
        return ReviewDecision.APPROVED
    if has_pending_requests:
        return ReviewDecision.REVIEW_REQUIRED
    return ReviewDecision.NONE


class PRFetcher:
    """Класс для чтения данных о PR и истории автора."""

    def __init__(self, github: Github, repository: str):
        """Инициализация.

        :param github: Клиент GitHub API
        :param repository: Полное имя репозитория (owner/repo)
        """
        self.github = github
        self.repository = repository
        self._repo: Repository | None = None

    @property
    def repo(self) -> Repository:
        """Репозиторий, запрашивается при первом обращении."""
        if self._repo is None:
            self._repo = self.github.get_repo(self.repository)
        return self._repo

    def fetch_pull_request(self, pr_number: int) -> tuple[PullRequestSnapshot, PullRequest]:
        """Получить снимок метаданных PR.

        :param pr_number: Номер PR
        :return: Снимок и объект PR для последующей публикации
        :raises FetchError: Если PR не удалось получить
        """
        try:
            pr = self.repo.get_pull(pr_number)
            files = tuple(f.filename for f in pr.get_files())
            pending = bool(list(pr.requested_reviewers or [])) or bool(list(pr.requested_teams or []))
            review_decision = derive_review_decision(pr.get_reviews(), pending)

            snapshot = PullRequestSnapshot(
                number=pr.number,
                title=pr.title or "",
                body=pr.body or "",
                author=pr.user.login,
                base_branch=pr.base.ref,
                head_branch=pr.head.ref,
                created_at=pr.created_at,
                updated_at=pr.updated_at,
                is_draft=bool(pr.draft),
                mergeable=to_mergeable(pr.mergeable),
                merge_state_status=to_merge_state_status(pr.mergeable_state),
                review_decision=review_decision,
                additions=pr.additions,
                deletions=pr.deletions,
                changed_files=pr.changed_files,
                files=files,
                labels=tuple(label.name for label in pr.labels),
                url=pr.html_url or "",
            )
        except API_ERRORS as e:
            raise FetchError(f"Не удалось получить PR #{pr_number}: {e}") from e

        logger.info(f"Получен PR #{pr_number}: {len(files)} файлов, +{snapshot.additions}/-{snapshot.deletions}")
        return snapshot, pr

    def fetch_siblings(self, exclude_number: int, limit: int = SIBLING_LIMIT) -> list[SiblingPR]:
        """Получить последние открытые PR, кроме текущего.

        При ошибке получения списка возвращает пустой список. PR, файлы
        которого получить не удалось, пропускается.

        :param exclude_number: Номер текущего PR
        :param limit: Сколько последних открытых PR просматривать
        :return: Открытые PR в порядке от новых к старым
        """
        try:
            pulls = list(self.repo.get_pulls(state="open", sort="created", direction="desc")[:limit])
        except API_ERRORS as e:
            logger.warning(f"Не удалось получить открытые PR, проверка дубликатов пропущена: {e}")
            return []

        siblings: list[SiblingPR] = []
        for pull in pulls:
            if pull.number == exclude_number:
                continue
            try:
                files = tuple(f.filename for f in pull.get_files())
            except API_ERRORS as e:
                logger.warning(f"Не удалось получить файлы PR #{pull.number}, пропускаем: {e}")
                continue
            siblings.append(
                SiblingPR(number=pull.number, title=pull.title or "", author=pull.user.login, files=files)
            )

        logger.info(f"Получено открытых PR для сравнения: {len(siblings)}")
        return siblings

    def _count(self, query: str) -> int:
        return min(self.github.search_issues(query).totalCount, HISTORY_LIMIT)

    def fetch_author_history(self, author: str) -> AuthorHistory:
        """Получить счетчики PR автора в репозитории.

        При ошибке API возвращает нулевую историю.

        :param author: Логин автора
        :return: Слитые, закрытые без слияния и открытые PR
        """
        base = f"repo:{self.repository} is:pr author:{author}"
        try:
            history = AuthorHistory(
                merged=self._count(f"{base} is:merged"),
                closed_unmerged=self._count(f"{base} is:closed is:unmerged"),
                open=self._count(f"{base} is:open"),
            )
        except API_ERRORS as e:
            logger.warning(f"Не удалось получить историю автора @{author}: {e}")
            return AuthorHistory()

        logger.info(
            f"История @{author}: слито {history.merged}, закрыто {history.closed_unmerged}, открыто {history.open}"
        )
        return history
