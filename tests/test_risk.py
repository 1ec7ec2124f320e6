"""
Тесты для оценки риска.
"""

import pytest

from pr_triage.models import PRType, RiskLevel
from pr_triage.risk import DEFAULT_REASON, assess_risk


class TestAssessRisk:
    """Тесты для функции assess_risk."""

    def test_small_change(self) -> None:
        """Тест небольшого изменения."""
        result = assess_risk(PRType.FEATURE, False, False, 20, 1)

        assert result.level == RiskLevel.LOW
        assert result.reasons == (DEFAULT_REASON,)

    @pytest.mark.parametrize(
        ("has_ci", "lines", "files"),
        [(False, 0, 0), (True, 10, 1), (False, 900, 30), (True, 300, 3)],
    )
    def test_security_always_critical(self, has_ci: bool, lines: int, files: int) -> None:
        """Тест: файлы безопасности всегда дают critical."""
        result = assess_risk(PRType.FEATURE, True, has_ci, lines, files)

        assert result.level == RiskLevel.CRITICAL
        assert result.reasons[0] == "Touches security-sensitive files"

    def test_ci_alongside_code(self) -> None:
        """Тест изменения CI вместе с кодом."""
        result = assess_risk(PRType.FEATURE, False, True, 20, 2)

        assert result.level == RiskLevel.HIGH
        assert result.reasons == ("Modifies CI pipelines alongside code",)

    def test_ci_only_pr_not_escalated(self) -> None:
        """Тест: PR типа ci не повышает риск из-за файлов CI."""
        result = assess_risk(PRType.CI, False, True, 20, 2)

        assert result.level == RiskLevel.LOW

    def test_large_change(self) -> None:
        """Тест большого изменения."""
        result = assess_risk(PRType.FEATURE, False, False, 600, 12)

        assert result.level == RiskLevel.HIGH
        assert result.reasons == ("Large change: 600 lines across 12 files",)

    def test_many_lines_few_files_is_medium(self) -> None:
        """Тест: много строк в нескольких файлах дает medium."""
        result = assess_risk(PRType.FEATURE, False, False, 600, 3)

        assert result.level == RiskLevel.MEDIUM
        assert result.reasons == ("Medium-sized change: 600 lines across 3 files",)

    def test_many_files_is_medium(self) -> None:
        """Тест: больше 5 файлов дает medium."""
        result = assess_risk(PRType.FEATURE, False, False, 40, 6)

        assert result.level == RiskLevel.MEDIUM

    def test_medium_size_does_not_lower_high(self) -> None:
        """Тест: правило размера не понижает уже установленный уровень."""
        result = assess_risk(PRType.FEATURE, False, True, 300, 3)

        assert result.level == RiskLevel.HIGH
        assert result.reasons == (
            "Modifies CI pipelines alongside code",
            "Medium-sized change: 300 lines across 3 files",
        )

    def test_security_and_large_change_reasons_accumulate(self) -> None:
        """Тест: 847 строк в 23 файлах с файлом безопасности."""
        result = assess_risk(PRType.FEATURE, True, False, 847, 23)

        assert result.level == RiskLevel.CRITICAL
        assert any("security-sensitive" in reason for reason in result.reasons)
        assert "Large change: 847 lines across 23 files" in result.reasons

    def test_all_rules_fire(self) -> None:
        """Тест срабатывания всех правил одновременно."""
        result = assess_risk(PRType.BUG_FIX, True, True, 847, 23)

        assert result.level == RiskLevel.CRITICAL
        assert len(result.reasons) == 3


class TestRiskLevel:
    """Тесты для сравнения уровней риска."""

    def test_raise_to(self) -> None:
        """Тест повышения уровня."""
        assert RiskLevel.LOW.raise_to(RiskLevel.HIGH) == RiskLevel.HIGH
        assert RiskLevel.CRITICAL.raise_to(RiskLevel.HIGH) == RiskLevel.CRITICAL
        assert RiskLevel.MEDIUM.raise_to(RiskLevel.MEDIUM) == RiskLevel.MEDIUM
