"""Поиск открытых PR, пересекающихся с текущим по измененным файлам."""

from collections.abc import Sequence

from .models import DuplicateFinding, RiskLevel, SiblingPR

DEFAULT_THRESHOLD = 50
HIGH_OVERLAP = 80
SIBLING_LIMIT = 30


def file_overlap(target_files: Sequence[str], other_files: Sequence[str]) -> int:
    """Посчитать процент файлов текущего PR, которые есть в другом PR.

    :param target_files: Файлы текущего PR
    :param other_files: Файлы другого PR
    :return: Процент пересечения (0-100), 0 если у текущего PR нет файлов
    """
    if not target_files:
        return 0
    other = set(other_files)
    matched = sum(1 for path in target_files if path in other)
    return matched * 100 // len(target_files)


def find_duplicates(
    target_files: Sequence[str],
    siblings: Sequence[SiblingPR],
    target_author: str,
    threshold: int = DEFAULT_THRESHOLD,
    target_number: int | None = None,
) -> list[DuplicateFinding]:
    """Найти возможные дубликаты среди открытых PR.

    Порядок результатов совпадает с порядком ``siblings``. PR без файлов
    не сравнивается: результат пуст при любом пороге, включая 0.

    :param target_files: Файлы текущего PR
    :param siblings: Другие открытые PR
    :param target_author: Автор текущего PR
    :param threshold: Минимальный процент пересечения
    :param target_number: Номер текущего PR, исключается из сравнения
    :return: Список найденных дубликатов
    """
    findings: list[DuplicateFinding] = []
    if not target_files:
        return findings

    for sibling in siblings:
        if target_number is not None and sibling.number == target_number:
            continue

        overlap = file_overlap(target_files, sibling.files)
        if overlap < threshold:
            continue

        if overlap >= HIGH_OVERLAP and sibling.author != target_author:
            risk = RiskLevel.HIGH
            note = f"⚠️ Different author with {overlap}% file overlap"
        else:
            risk = RiskLevel.MEDIUM
            note = "Overlapping files"

        findings.append(
            DuplicateFinding(
                number=sibling.number,
                title=sibling.title,
                author=sibling.author,
                overlap=overlap,
                risk=risk,
                note=note,
            )
        )

    return findings
