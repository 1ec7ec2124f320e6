"""
Тесты для профиля автора.
"""

import pytest

from pr_triage.contributors import is_bot, merge_rate, profile, select_tier
from pr_triage.models import AuthorHistory, Tier


class TestSelectTier:
    """Тесты для функции select_tier."""

    def test_first_time(self) -> None:
        """Тест первого PR автора."""
        assert select_tier(0, 0, 1) == Tier.FIRST_TIME

    def test_single_merged_pr_is_new(self) -> None:
        """Тест: один слитый PR уже не first-time."""
        assert select_tier(1, 0, 0) == Tier.NEW

    @pytest.mark.parametrize(("merged", "closed", "open_count"), [(0, 0, 0), (1, 1, 1), (0, 2, 0)])
    def test_new(self, merged: int, closed: int, open_count: int) -> None:
        """Тест нового автора."""
        assert select_tier(merged, closed, open_count) == Tier.NEW

    def test_trusted(self) -> None:
        """Тест: 12 PR, 11 слито."""
        result = profile("alice", AuthorHistory(merged=11, closed_unmerged=0, open=1))

        assert result.merge_rate == 91
        assert result.tier == Tier.TRUSTED

    def test_high_rate_but_few_merged_is_regular(self) -> None:
        """Тест: высокая доля слияний, но меньше 10 слитых PR."""
        assert select_tier(9, 0, 1) == Tier.REGULAR

    def test_regular(self) -> None:
        """Тест обычного автора."""
        assert select_tier(6, 4, 0) == Tier.REGULAR

    def test_low_merge_rate(self) -> None:
        """Тест низкой доли слияний."""
        assert select_tier(1, 5, 0) == Tier.LOW_MERGE_RATE

    def test_occasional(self) -> None:
        """Тест автора без явной категории."""
        assert select_tier(2, 2, 0) == Tier.OCCASIONAL


class TestProfile:
    """Тесты для функции profile."""

    def test_empty_history(self) -> None:
        """Тест пустой истории."""
        result = profile("alice", AuthorHistory())

        assert result.total == 0
        assert result.merge_rate == 0
        assert result.tier == Tier.NEW

    def test_bot_does_not_change_tier(self) -> None:
        """Тест: признак бота не влияет на категорию."""
        history = AuthorHistory(merged=11, closed_unmerged=0, open=1)

        human = profile("alice", history)
        bot = profile("dependabot[bot]", history)

        assert bot.is_bot
        assert not human.is_bot
        assert bot.tier == human.tier

    def test_merge_rate_rounds_down(self) -> None:
        """Тест округления доли слияний вниз."""
        assert merge_rate(2, 3) == 66
        assert merge_rate(0, 0) == 0


class TestIsBot:
    """Тесты для функции is_bot."""

    @pytest.mark.parametrize("login", ["Renovate-Bot", "snyk-io", "github-actions", "CodeCov", "my-bot"])
    def test_bots(self, login: str) -> None:
        """Тест автоматизированных аккаунтов."""
        assert is_bot(login)

    def test_human(self) -> None:
        """Тест обычного пользователя."""
        assert not is_bot("octocat")
