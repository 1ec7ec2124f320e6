"""Формирование комментария с результатами триажа и набора меток."""

from collections.abc import Sequence

from .contributors import TIER_ACTIONS, TIER_DISPLAY
from .models import (
    Action,
    ContributorProfile,
    DuplicateFinding,
    PRType,
    PullRequestSnapshot,
    ReviewDecision,
    RiskAssessment,
    RiskLevel,
)
from .recommendation import ACTION_EMOJI, describe

NEXT_LINE = "\n"

REPORT_MARKER = "<!-- pr-triage-action:report -->"
HEADING_MARKER = "PR Triage —"

SMALL_CHANGE_LINES = 50
SMALL_CHANGE_FILES = 2
LARGE_CHANGE_LINES = 500

TYPE_EMOJI = {
    PRType.CHORE: "🔧",
    PRType.DOCS: "📝",
    PRType.CI: "⚙️",
    PRType.DEPS: "📦",
    PRType.BUG_FIX: "🐛",
    PRType.FEATURE: "✨",
    PRType.REFACTOR: "♻️",
    PRType.TEST: "🧪",
}

RISK_EMOJI = {
    RiskLevel.LOW: "🟢",
    RiskLevel.MEDIUM: "🟡",
    RiskLevel.HIGH: "🟠",
    RiskLevel.CRITICAL: "🔴",
}

TRAILER = (
    '<sub>🤖 Auto-triaged by <a href="https://github.com/dinakars777/openclaw-triage-action">'
    "openclaw-triage-action</a></sub>"
)


def suggest_labels(
    pr_type: PRType,
    risk: RiskLevel,
    has_security_files: bool,
    is_draft: bool,
    total_changes: int,
    changed_files: int,
) -> tuple[str, ...]:
    """Подобрать метки для PR.

    :return: Метки без повторов в порядке добавления, первой всегда идет ``triage:<type>``
    """
    labels = [f"triage:{pr_type.value}"]

    if risk in (RiskLevel.HIGH, RiskLevel.CRITICAL):
        labels.append(f"risk:{risk.value}")
    if has_security_files:
        labels.append("security")
    if is_draft:
        labels.append("draft")

    if total_changes < SMALL_CHANGE_LINES and changed_files <= SMALL_CHANGE_FILES:
        labels.append("size:small")
    elif total_changes > LARGE_CHANGE_LINES:
        labels.append("size:large")

    return tuple(dict.fromkeys(labels))


def escape_cell(value: str) -> str:
    """Экранировать текст для ячейки markdown-таблицы."""
    return value.replace("|", "\\|").replace("\r", " ").replace("\n", " ")


def render_duplicates(duplicates: Sequence[DuplicateFinding]) -> str:
    """Секция с возможными дубликатами, пустая строка если их нет."""
    if not duplicates:
        return ""

    rows = [
        f"| #{d.number} | {escape_cell(d.title)} | @{d.author} | {d.overlap}% | {d.risk.value} |"
        for d in duplicates
    ]
    return f"""
### 🔍 Potential Duplicates

| PR | Title | Author | File Overlap | Risk |
|----|-------|--------|-------------|------|
{NEXT_LINE.join(rows)}
"""


def render_contributor(contributor: ContributorProfile | None) -> str:
    """Секция профиля автора, пустая строка если профиль не строился."""
    if contributor is None:
        return ""

    bot_suffix = " 🤖 *Automated account*" if contributor.is_bot else ""
    return f"""
### 👤 Contributor: @{contributor.author}{bot_suffix}

| Metric | Value |
|--------|-------|
| **Tier** | {TIER_DISPLAY[contributor.tier]} |
| **Total PRs** | {contributor.total} |
| **Merged** | {contributor.history.merged} ✅ |
| **Merge Rate** | {contributor.merge_rate}% |
| **Open PRs** | {contributor.history.open} |

> {TIER_ACTIONS[contributor.tier]}
"""


def render_comment(
    pr: PullRequestSnapshot,
    pr_type: PRType,
    risk: RiskAssessment,
    action: Action,
    labels: Sequence[str],
    duplicates: Sequence[DuplicateFinding] | None = None,
    contributor: ContributorProfile | None = None,
) -> str:
    """Собрать текст комментария.

    Результат зависит только от аргументов, поэтому повторный рендер тех же
    решений дает тот же текст и обновление комментария ничего не меняет.

    :param pr: Снимок PR
    :param pr_type: Тип PR
    :param risk: Оценка риска
    :param action: Рекомендуемое действие
    :param labels: Предлагаемые метки
    :param duplicates: Найденные дубликаты
    :param contributor: Профиль автора
    :return: Текст комментария в markdown
    """
    reasons = NEXT_LINE.join(f"- {reason}" for reason in risk.reasons)
    labels_line = "".join(f" `{label}`" for label in labels)
    review = pr.review_decision.value if pr.review_decision != ReviewDecision.NONE else "none"

    return f"""{REPORT_MARKER}
## {ACTION_EMOJI[action]} {HEADING_MARKER} #{pr.number}

{describe(action, pr_type)}

---

### 📊 Classification

| Field | Value |
|-------|-------|
| **Type** | {TYPE_EMOJI[pr_type]} `{pr_type.value}` |
| **Risk** | {RISK_EMOJI[risk.level]} `{risk.level.value}` |
| **Size** | `+{pr.additions} / -{pr.deletions}` across {pr.changed_files} files |
| **Branch** | `{pr.head_branch}` → `{pr.base_branch}` |
| **Draft** | {str(pr.is_draft).lower()} |
| **Mergeable** | {pr.mergeable.value} ({pr.merge_state_status.value}) |
| **Review** | {review} |

**Risk factors:**
{reasons}

**Suggested labels:**{labels_line}
{render_duplicates(duplicates or ())}{render_contributor(contributor)}
---
{TRAILER}"""


def is_triage_comment(body: str | None) -> bool:
    """Проверить, является ли комментарий отчетом триажа.

    Основной признак: скрытый маркер. Комментарии старых версий без маркера
    распознаются по заголовку.
    """
    if not body:
        return False
    if REPORT_MARKER in body:
        return True
    return body.startswith("## ") and HEADING_MARKER in body.splitlines()[0]
