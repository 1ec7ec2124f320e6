#!/usr/bin/env python
"""Главный модуль для запуска триажа PR из GitHub Actions."""

import logging
import sys

from .config import TriageSettings
from .triage import PRTriage
from .workflow import annotate, set_github_output

# Настройка логирования
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Главная функция для запуска из GitHub Actions."""
    try:
        settings = TriageSettings.from_env()

        report, result = PRTriage(settings).process()

        set_github_output("pr-type", report.classification.pr_type.value)
        set_github_output("risk", report.risk.level.value)
        set_github_output("action", report.action.value)
        set_github_output("labels", ",".join(report.labels))
        set_github_output("comment-id", str(result.comment_id) if result.comment_id is not None else "")

        logger.info(
            f"PR #{settings.pr_number}: {report.classification.pr_type.value} | "
            f"риск {report.risk.level.value} | {report.action.value}"
        )

    except Exception as e:
        logger.error(f"Критическая ошибка: {e}")
        annotate("error", str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
