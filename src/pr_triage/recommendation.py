"""Выбор рекомендуемого действия по PR."""

from collections.abc import Callable
from typing import NamedTuple

from .models import Action, Mergeable, MergeStateStatus, PRType, ReviewDecision, RiskLevel


class RecommendationInput(NamedTuple):
    """Состояние PR, от которого зависит рекомендация."""

    is_draft: bool
    risk: RiskLevel
    review_decision: ReviewDecision
    merge_state_status: MergeStateStatus
    mergeable: Mergeable
    pr_type: PRType


RULES: tuple[tuple[Action, Callable[[RecommendationInput], bool]], ...] = (
    (Action.DRAFT, lambda s: s.is_draft),
    (Action.SECURITY_REVIEW, lambda s: s.risk == RiskLevel.CRITICAL),
    (
        Action.READY_TO_MERGE,
        lambda s: s.review_decision == ReviewDecision.APPROVED and s.merge_state_status == MergeStateStatus.CLEAN,
    ),
    (Action.CHANGES_REQUESTED, lambda s: s.review_decision == ReviewDecision.CHANGES_REQUESTED),
    (Action.MERGE_CONFLICTS, lambda s: s.mergeable == Mergeable.CONFLICTING),
    (Action.QUICK_REVIEW, lambda s: s.pr_type in (PRType.DOCS, PRType.DEPS)),
)

ACTION_EMOJI = {
    Action.DRAFT: "⏳",
    Action.SECURITY_REVIEW: "🚨",
    Action.READY_TO_MERGE: "✅",
    Action.CHANGES_REQUESTED: "🔄",
    Action.MERGE_CONFLICTS: "⚠️",
    Action.QUICK_REVIEW: "👀",
    Action.NEEDS_REVIEW: "👁️",
}


def recommend(
    is_draft: bool,
    risk: RiskLevel,
    review_decision: ReviewDecision,
    merge_state_status: MergeStateStatus,
    mergeable: Mergeable,
    pr_type: PRType,
) -> Action:
    """Выбрать одно рекомендуемое действие, первое подходящее по приоритету."""
    state = RecommendationInput(is_draft, risk, review_decision, merge_state_status, mergeable, pr_type)
    for action, matches in RULES:
        if matches(state):
            return action
    return Action.NEEDS_REVIEW


def describe(action: Action, pr_type: PRType) -> str:
    """Текст рекомендации для комментария.

    :param action: Рекомендуемое действие
    :param pr_type: Тип PR, подставляется в часть формулировок
    :return: Строка в markdown
    """
    emoji = ACTION_EMOJI[action]
    texts = {
        Action.DRAFT: "**Draft PR**: No review needed yet. Check back when marked ready.",
        Action.SECURITY_REVIEW: (
            "**Security Review Required**: This PR touches security-sensitive code. "
            "Request a security-focused reviewer."
        ),
        Action.READY_TO_MERGE: "**Ready to Merge**: Approved and CI passing.",
        Action.CHANGES_REQUESTED: "**Changes Requested**: Author needs to address review feedback.",
        Action.MERGE_CONFLICTS: "**Merge Conflicts**: Base branch has diverged. Author needs to rebase.",
        Action.QUICK_REVIEW: f"**Quick Review**: Low-risk {pr_type.value} change. Can be reviewed quickly.",
        Action.NEEDS_REVIEW: f"**Needs Review**: Assign a reviewer for this {pr_type.value} PR.",
    }
    return f"{emoji} {texts[action]}"
