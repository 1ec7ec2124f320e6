"""Публикация результатов триажа: комментарий и метки."""

import logging
from collections.abc import Sequence

from github import UnknownObjectException
from github.IssueComment import IssueComment
from github.PullRequest import PullRequest
from github.Repository import Repository

from .fetcher import API_ERRORS
from .models import PublishResult
from .report import is_triage_comment
from .workflow import annotate

logger = logging.getLogger(__name__)

LABEL_COLOR = "0E8A16"


class TriagePublisher:
    """Класс для записи комментария и меток в PR.

    Ошибка одной записи не отменяет другую: каждая из них только
    логируется как предупреждение.
    """

    def __init__(self, repo: Repository, pr: PullRequest):
        """Инициализация.

        :param repo: Репозиторий
        :param pr: Pull Request, в который пишется отчет
        """
        self.repo = repo
        self.pr = pr

    def find_existing_comment(self) -> IssueComment | None:
        """Найти ранее созданный комментарий триажа."""
        for comment in self.pr.get_issue_comments():
            if is_triage_comment(comment.body):
                return comment
        return None

    def upsert_comment(self, body: str, result: PublishResult) -> None:
        """Обновить существующий комментарий или создать новый."""
        try:
            existing = self.find_existing_comment()
            if existing is not None:
                logger.info(f"Обновляем комментарий триажа {existing.id}")
                existing.edit(body)
                result.comment_id = existing.id
                result.comment_updated = True
            else:
                logger.info("Создаем комментарий триажа")
                comment = self.pr.create_issue_comment(body)
                result.comment_id = comment.id
        except API_ERRORS as e:
            logger.warning(f"Не удалось записать комментарий: {e}")
            annotate("warning", "Failed to post triage comment")

    def ensure_label(self, name: str) -> None:
        """Создать метку в репозитории, если ее еще нет."""
        try:
            self.repo.get_label(name)
        except UnknownObjectException:
            logger.info(f"Создаем метку {name}")
            try:
                self.repo.create_label(name, LABEL_COLOR)
            except API_ERRORS as e:
                # 422 already_exists при параллельных запусках
                logger.warning(f"Не удалось создать метку {name}: {e}")

    def apply_labels(self, labels: Sequence[str], result: PublishResult) -> None:
        """Создать недостающие метки и добавить их к PR."""
        if not labels:
            return
        try:
            for label in labels:
                self.ensure_label(label)
            self.pr.add_to_labels(*labels)
            result.labels_applied = True
            logger.info(f"Метки применены: {', '.join(labels)}")
        except API_ERRORS as e:
            logger.warning(f"Не удалось применить метки: {e}")
            annotate("warning", "Failed to apply labels")

    def publish(self, body: str, labels: Sequence[str], enable_labels: bool = True) -> PublishResult:
        """Записать комментарий и, если включено, метки.

        :param body: Текст комментария
        :param labels: Метки для PR
        :param enable_labels: Применять ли метки
        :return: Что удалось записать
        """
        result = PublishResult()
        self.upsert_comment(body, result)
        if enable_labels:
            self.apply_labels(labels, result)
        return result
