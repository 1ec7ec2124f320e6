"""Оценка риска PR."""

from collections.abc import Callable
from typing import NamedTuple

from .models import PRType, RiskAssessment, RiskLevel

LARGE_CHANGE_LINES = 500
LARGE_CHANGE_FILES = 10
MEDIUM_CHANGE_LINES = 200
MEDIUM_CHANGE_FILES = 5

DEFAULT_REASON = "Small, focused change"


class RiskInput(NamedTuple):
    """Данные для оценки риска."""

    pr_type: PRType
    has_security_files: bool
    has_ci_files: bool
    total_changes: int
    changed_files: int


class RiskFactor(NamedTuple):
    """Сработавшее правило: уровень, до которого поднимается риск, и причина."""

    level: RiskLevel
    reason: str


RiskRule = Callable[[RiskInput], RiskFactor | None]


def security_rule(data: RiskInput) -> RiskFactor | None:
    """Изменения в файлах, связанных с безопасностью, дают критический риск."""
    if data.has_security_files:
        return RiskFactor(RiskLevel.CRITICAL, "Touches security-sensitive files")
    return None


def ci_rule(data: RiskInput) -> RiskFactor | None:
    """Правка CI в PR, который сам не относится к CI, дает высокий риск."""
    if data.has_ci_files and data.pr_type != PRType.CI:
        return RiskFactor(RiskLevel.HIGH, "Modifies CI pipelines alongside code")
    return None


def size_rule(data: RiskInput) -> RiskFactor | None:
    """Большой размер изменения дает высокий риск, средний дает средний."""
    # Большое и среднее изменение взаимоисключающие
    if data.total_changes > LARGE_CHANGE_LINES and data.changed_files > LARGE_CHANGE_FILES:
        return RiskFactor(
            RiskLevel.HIGH,
            f"Large change: {data.total_changes} lines across {data.changed_files} files",
        )
    if data.total_changes > MEDIUM_CHANGE_LINES or data.changed_files > MEDIUM_CHANGE_FILES:
        return RiskFactor(
            RiskLevel.MEDIUM,
            f"Medium-sized change: {data.total_changes} lines across {data.changed_files} files",
        )
    return None


RULES: tuple[RiskRule, ...] = (security_rule, ci_rule, size_rule)


def assess_risk(
    pr_type: PRType,
    has_security_files: bool,
    has_ci_files: bool,
    total_changes: int,
    changed_files: int,
) -> RiskAssessment:
    """Оценить риск PR.

    Каждое правило может только повысить уровень риска. Причины
    накапливаются в порядке срабатывания правил.

    :param pr_type: Тип PR
    :param has_security_files: Затронуты файлы, связанные с безопасностью
    :param has_ci_files: Затронуты файлы CI
    :param total_changes: Количество измененных строк
    :param changed_files: Количество измененных файлов
    :return: Уровень риска и причины
    """
    data = RiskInput(pr_type, has_security_files, has_ci_files, total_changes, changed_files)
    level = RiskLevel.LOW
    reasons: list[str] = []

    for rule in RULES:
        factor = rule(data)
        if factor is None:
            continue
        level = level.raise_to(factor.level)
        reasons.append(factor.reason)

    if not reasons:
        reasons.append(DEFAULT_REASON)

    return RiskAssessment(level=level, reasons=tuple(reasons))
