"""Триаж Pull Request: сбор данных, принятие решений и публикация отчета."""

import logging

from github import Github

from .classifier import classify, has_ci_files, has_security_files
from .config import TriageSettings
from .contributors import profile
from .duplicates import find_duplicates
from .fetcher import PRFetcher
from .models import AuthorHistory, PublishResult, PullRequestSnapshot, SiblingPR, TriageReport
from .publisher import TriagePublisher
from .recommendation import recommend
from .report import render_comment, suggest_labels
from .risk import assess_risk

logger = logging.getLogger(__name__)


def build_report(
    pr: PullRequestSnapshot,
    siblings: list[SiblingPR] | None = None,
    history: AuthorHistory | None = None,
    duplicate_threshold: int = 50,
) -> TriageReport:
    """Принять все решения по PR и сформировать отчет.

    Функция не обращается к API: все данные уже получены.

    :param pr: Снимок PR
    :param siblings: Открытые PR для поиска дубликатов, None если проверка отключена
    :param history: История автора, None если профилирование отключено
    :param duplicate_threshold: Порог пересечения файлов в процентах
    :return: Отчет с решениями, текстом комментария и метками
    """
    classification = classify(pr.files, pr.title, pr.body, pr.head_branch)
    security = has_security_files(pr.files)
    risk = assess_risk(
        classification.pr_type,
        security,
        has_ci_files(pr.files),
        pr.total_changes,
        pr.changed_files,
    )
    action = recommend(
        pr.is_draft,
        risk.level,
        pr.review_decision,
        pr.merge_state_status,
        pr.mergeable,
        classification.pr_type,
    )
    labels = suggest_labels(
        classification.pr_type,
        risk.level,
        security,
        pr.is_draft,
        pr.total_changes,
        pr.changed_files,
    )

    duplicates = None
    if siblings is not None:
        duplicates = tuple(find_duplicates(pr.files, siblings, pr.author, duplicate_threshold, pr.number))

    contributor = profile(pr.author, history) if history is not None else None

    body = render_comment(pr, classification.pr_type, risk, action, labels, duplicates, contributor)

    return TriageReport(
        pr=pr,
        classification=classification,
        risk=risk,
        action=action,
        has_security_files=security,
        duplicates=duplicates,
        contributor=contributor,
        labels=labels,
        body=body,
    )


class PRTriage:
    """Класс для триажа одного PR."""

    def __init__(self, settings: TriageSettings):
        """Инициализация.

        :param settings: Настройки запуска
        """
        self.settings = settings
        self.github = Github(settings.github_token)
        self.fetcher = PRFetcher(self.github, settings.repository)

    def process(self) -> tuple[TriageReport, PublishResult]:
        """Основной процесс триажа.

        :return: Отчет и результат публикации
        :raises FetchError: Если не удалось получить PR
        """
        settings = self.settings
        logger.info(f"Начинаем триаж PR #{settings.pr_number} в репозитории {settings.repository}")

        snapshot, pull = self.fetcher.fetch_pull_request(settings.pr_number)

        siblings = None
        if settings.enable_duplicate_check:
            logger.info("Ищем дубликаты...")
            siblings = self.fetcher.fetch_siblings(settings.pr_number)

        history = None
        if settings.enable_contributor_profile:
            logger.info(f"Строим профиль автора @{snapshot.author}...")
            history = self.fetcher.fetch_author_history(snapshot.author)

        report = build_report(snapshot, siblings, history, settings.duplicate_threshold)
        logger.info(
            f"Тип: {report.classification.pr_type.value}, риск: {report.risk.level.value}, "
            f"действие: {report.action.value}"
        )

        # Запись только после того, как все решения приняты
        publisher = TriagePublisher(self.fetcher.repo, pull)
        result = publisher.publish(report.body, report.labels, settings.enable_labels)

        logger.info(f"Триаж PR #{settings.pr_number} завершен")
        return report, result
