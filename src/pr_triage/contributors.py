"""Профиль автора PR по истории его вкладов."""

import re
from collections.abc import Callable
from typing import NamedTuple

from .models import AuthorHistory, ContributorProfile, Tier

BOT_PATTERN = re.compile(r"bot|dependabot|renovate|snyk|github-actions|codecov")


class TierStats(NamedTuple):
    """Показатели, по которым выбирается категория автора."""

    merged: int
    total: int
    merge_rate: int


class TierBand(NamedTuple):
    """Категория автора и условие попадания в нее."""

    tier: Tier
    matches: Callable[[TierStats], bool]


# Порядок важен: выбирается первая подходящая категория
TIER_BANDS: tuple[TierBand, ...] = (
    TierBand(Tier.FIRST_TIME, lambda s: s.total == 1 and s.merged == 0),
    TierBand(Tier.NEW, lambda s: s.total <= 3),
    TierBand(Tier.TRUSTED, lambda s: s.merge_rate >= 80 and s.merged >= 10),
    TierBand(Tier.REGULAR, lambda s: s.merge_rate >= 60),
    TierBand(Tier.LOW_MERGE_RATE, lambda s: s.merge_rate < 30 and s.total >= 5),
)

TIER_DISPLAY = {
    Tier.FIRST_TIME: "🆕 First-time contributor",
    Tier.NEW: "🌱 New contributor",
    Tier.TRUSTED: "⭐ Trusted contributor",
    Tier.REGULAR: "✅ Regular contributor",
    Tier.LOW_MERGE_RATE: "⚠️ Low merge rate",
    Tier.OCCASIONAL: "👤 Occasional contributor",
}

TIER_ACTIONS = {
    Tier.FIRST_TIME: "Welcome! Consider leaving encouraging, constructive feedback.",
    Tier.NEW: "May need guidance on project conventions.",
    Tier.TRUSTED: "Fast-track review recommended, high merge rate.",
    Tier.REGULAR: "Standard review process.",
    Tier.LOW_MERGE_RATE: "Review with extra attention to quality.",
    Tier.OCCASIONAL: "Standard review process.",
}


def merge_rate(merged: int, total: int) -> int:
    """Доля слитых PR в процентах с округлением вниз, 0 при пустой истории."""
    if total <= 0:
        return 0
    return merged * 100 // total


def select_tier(merged: int, closed_unmerged: int, open_count: int) -> Tier:
    """Определить категорию автора по счетчикам PR.

    :param merged: Слитые PR
    :param closed_unmerged: Закрытые без слияния PR
    :param open_count: Открытые PR
    :return: Категория автора
    """
    total = merged + closed_unmerged + open_count
    stats = TierStats(merged=merged, total=total, merge_rate=merge_rate(merged, total))
    for band in TIER_BANDS:
        if band.matches(stats):
            return band.tier
    return Tier.OCCASIONAL


def is_bot(author: str) -> bool:
    """Проверить, похож ли логин на автоматизированный аккаунт."""
    return BOT_PATTERN.search(author.lower()) is not None


def profile(author: str, history: AuthorHistory) -> ContributorProfile:
    """Построить профиль автора.

    :param author: Логин автора
    :param history: Счетчики PR автора
    :return: Профиль с долей слияний, категорией и признаком бота
    """
    total = history.merged + history.closed_unmerged + history.open
    return ContributorProfile(
        author=author,
        history=history,
        total=total,
        merge_rate=merge_rate(history.merged, total),
        tier=select_tier(history.merged, history.closed_unmerged, history.open),
        is_bot=is_bot(author),
    )
