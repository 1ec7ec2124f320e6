"""Модели данных для триажа Pull Request."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PRType(str, Enum):
    """Тип Pull Request."""

    CHORE = "chore"
    DOCS = "docs"
    CI = "ci"
    DEPS = "deps"
    BUG_FIX = "bug-fix"
    FEATURE = "feature"
    REFACTOR = "refactor"
    TEST = "test"


class RiskLevel(str, Enum):
    """Уровень риска изменения, от низкого к критическому."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Порядковый номер уровня для сравнения."""
        return list(RiskLevel).index(self)

    def raise_to(self, other: "RiskLevel") -> "RiskLevel":
        """Вернуть максимальный из двух уровней."""
        return other if other.rank > self.rank else self


class Mergeable(str, Enum):
    """Возможность слияния PR."""

    UNKNOWN = "UNKNOWN"
    MERGEABLE = "MERGEABLE"
    CONFLICTING = "CONFLICTING"


class MergeStateStatus(str, Enum):
    """Состояние слияния PR по данным GitHub."""

    BEHIND = "BEHIND"
    BLOCKED = "BLOCKED"
    CLEAN = "CLEAN"
    DIRTY = "DIRTY"
    DRAFT = "DRAFT"
    HAS_HOOKS = "HAS_HOOKS"
    UNKNOWN = "UNKNOWN"
    UNSTABLE = "UNSTABLE"


class ReviewDecision(str, Enum):
    """Итоговое решение ревью."""

    NONE = "NONE"
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    REVIEW_REQUIRED = "REVIEW_REQUIRED"


class Tier(str, Enum):
    """Категория автора по истории его PR."""

    FIRST_TIME = "first-time"
    NEW = "new"
    TRUSTED = "trusted"
    REGULAR = "regular"
    LOW_MERGE_RATE = "low-merge-rate"
    OCCASIONAL = "occasional"


class Action(str, Enum):
    """Рекомендуемое следующее действие по PR."""

    DRAFT = "draft"
    SECURITY_REVIEW = "security-review"
    READY_TO_MERGE = "ready-to-merge"
    CHANGES_REQUESTED = "changes-requested"
    MERGE_CONFLICTS = "merge-conflicts"
    QUICK_REVIEW = "quick-review"
    NEEDS_REVIEW = "needs-review"


class PullRequestSnapshot(BaseModel):
    """Снимок метаданных PR, полученный один раз за запуск."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(description="Номер PR")
    title: str = Field(description="Заголовок PR")
    body: str = Field(description="Описание PR", default="")
    author: str = Field(description="Логин автора PR")
    base_branch: str = Field(description="Целевая ветка")
    head_branch: str = Field(description="Ветка с изменениями")
    created_at: datetime | None = Field(description="Дата создания PR", default=None)
    updated_at: datetime | None = Field(description="Дата последнего обновления PR", default=None)
    is_draft: bool = Field(description="Черновик ли PR", default=False)
    mergeable: Mergeable = Field(description="Возможность слияния", default=Mergeable.UNKNOWN)
    merge_state_status: MergeStateStatus = Field(
        description="Состояние слияния", default=MergeStateStatus.UNKNOWN
    )
    review_decision: ReviewDecision = Field(description="Решение ревью", default=ReviewDecision.NONE)
    additions: int = Field(description="Количество добавленных строк", default=0)
    deletions: int = Field(description="Количество удаленных строк", default=0)
    changed_files: int = Field(description="Количество измененных файлов", default=0)
    files: tuple[str, ...] = Field(description="Пути измененных файлов", default=())
    labels: tuple[str, ...] = Field(description="Текущие метки PR", default=())
    url: str = Field(description="Ссылка на PR", default="")

    @property
    def total_changes(self) -> int:
        """Суммарное количество измененных строк."""
        return self.additions + self.deletions


class SiblingPR(BaseModel):
    """Другой открытый PR, используемый для поиска дубликатов."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(description="Номер PR")
    title: str = Field(description="Заголовок PR")
    author: str = Field(description="Логин автора PR")
    files: tuple[str, ...] = Field(description="Пути измененных файлов", default=())


class AuthorHistory(BaseModel):
    """Счетчики PR автора в репозитории."""

    model_config = ConfigDict(frozen=True)

    merged: int = Field(description="Слитые PR", default=0, ge=0)
    closed_unmerged: int = Field(description="Закрытые без слияния PR", default=0, ge=0)
    open: int = Field(description="Открытые PR", default=0, ge=0)


class Classification(BaseModel):
    """Результат классификации PR вместе с сработавшим правилом."""

    model_config = ConfigDict(frozen=True)

    pr_type: PRType = Field(description="Тип PR")
    evidence: str = Field(description="Правило, которое определило тип", default="default")


class RiskAssessment(BaseModel):
    """Оценка риска и список причин."""

    model_config = ConfigDict(frozen=True)

    level: RiskLevel = Field(description="Уровень риска")
    reasons: tuple[str, ...] = Field(description="Причины в порядке срабатывания правил", min_length=1)


class DuplicateFinding(BaseModel):
    """Открытый PR с большим пересечением по файлам."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(description="Номер найденного PR")
    title: str = Field(description="Заголовок найденного PR", default="")
    author: str = Field(description="Автор найденного PR", default="")
    overlap: int = Field(description="Процент пересечения файлов", ge=0, le=100)
    risk: RiskLevel = Field(description="Уровень риска дубликата (medium или high)")
    note: str = Field(description="Пояснение")


class ContributorProfile(BaseModel):
    """Профиль автора: история, доля слияний и категория."""

    model_config = ConfigDict(frozen=True)

    author: str = Field(description="Логин автора")
    history: AuthorHistory = Field(description="История PR автора")
    total: int = Field(description="Всего PR автора")
    merge_rate: int = Field(description="Доля слитых PR в процентах", ge=0, le=100)
    tier: Tier = Field(description="Категория автора")
    is_bot: bool = Field(description="Автоматизированный аккаунт", default=False)


class TriageReport(BaseModel):
    """Итог триажа: все решения, текст комментария и метки."""

    model_config = ConfigDict(frozen=True)

    pr: PullRequestSnapshot
    classification: Classification
    risk: RiskAssessment
    action: Action
    has_security_files: bool = False
    duplicates: tuple[DuplicateFinding, ...] | None = Field(
        description="Найденные дубликаты, None если проверка отключена", default=None
    )
    contributor: ContributorProfile | None = Field(
        description="Профиль автора, None если профилирование отключено", default=None
    )
    labels: tuple[str, ...] = Field(description="Предлагаемые метки", default=())
    body: str = Field(description="Текст комментария", default="")


class PublishResult(BaseModel):
    """Результат записи комментария и меток."""

    comment_id: int | None = Field(description="ID созданного или обновленного комментария", default=None)
    comment_updated: bool = Field(description="Был ли обновлен существующий комментарий", default=False)
    labels_applied: bool = Field(description="Применены ли метки", default=False)
