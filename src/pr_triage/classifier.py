"""Классификация PR по путям файлов и ключевым словам.

Правила проверяются по порядку, срабатывает первое подходящее.
Если не сработало ни одно правило, PR получает тип ``chore``.
"""

import re
from collections.abc import Callable, Sequence
from typing import NamedTuple

from .models import Classification, PRType

DOCS_PATTERN = re.compile(r"\.md$|\.txt$|\.rst$|^docs/|^doc/")
CI_PATTERN = re.compile(r"\.github/workflows/|Makefile$|Dockerfile$|\.ci/|\.circleci/|\.travis\.yml$|Jenkinsfile$")
DEPS_PATTERN = re.compile(
    r"package\.json$|package-lock\.json$|yarn\.lock$|Cargo\.toml$|Cargo\.lock$"
    r"|go\.mod$|go\.sum$|requirements\.txt$|Gemfile|pnpm-lock"
)
TEST_PATTERN = re.compile(r"test|spec|__tests__|_test\.")
SECURITY_PATTERN = re.compile(
    r"auth|security|crypto|password|token|secret|session|permission|access"
    r"|login|oauth|jwt|encrypt|certificate|ssl|tls"
)

BUG_FIX_KEYWORDS = re.compile(r"fix|bug|crash|error|regression|resolve|patch")
FEATURE_KEYWORDS = re.compile(r"feat|add|implement|new|support|introduce")
REFACTOR_KEYWORDS = re.compile(r"refactor|cleanup|reorganize|rename|restructure")

BODY_LIMIT = 2000


class ClassificationInput(NamedTuple):
    """Данные, по которым классифицируется PR."""

    files: tuple[str, ...]
    text: str


class ClassificationRule(NamedTuple):
    """Правило классификации: тип PR и условие его срабатывания."""

    pr_type: PRType
    evidence: str
    matches: Callable[[ClassificationInput], bool]


def all_files_match(pattern: re.Pattern[str]) -> Callable[[ClassificationInput], bool]:
    """Условие: PR меняет хотя бы один файл и все файлы подходят под шаблон.

    Пустой список файлов не считается совпадением, такой PR
    классифицируется по тексту.
    """

    def check(data: ClassificationInput) -> bool:
        return bool(data.files) and all(pattern.search(path) for path in data.files)

    return check


def text_matches(pattern: re.Pattern[str]) -> Callable[[ClassificationInput], bool]:
    """Условие: текст PR содержит одно из ключевых слов."""

    def check(data: ClassificationInput) -> bool:
        return pattern.search(data.text) is not None

    return check


RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(PRType.DOCS, "all files are documentation", all_files_match(DOCS_PATTERN)),
    ClassificationRule(PRType.CI, "all files are CI configuration", all_files_match(CI_PATTERN)),
    ClassificationRule(PRType.DEPS, "all files are dependency manifests", all_files_match(DEPS_PATTERN)),
    ClassificationRule(PRType.BUG_FIX, "bug-fix keyword in text", text_matches(BUG_FIX_KEYWORDS)),
    ClassificationRule(PRType.FEATURE, "feature keyword in text", text_matches(FEATURE_KEYWORDS)),
    ClassificationRule(PRType.REFACTOR, "refactor keyword in text", text_matches(REFACTOR_KEYWORDS)),
    ClassificationRule(PRType.TEST, "all files are tests", all_files_match(TEST_PATTERN)),
)


def build_text(title: str, body: str, head_branch: str) -> str:
    """Собрать текст для поиска ключевых слов в нижнем регистре.

    :param title: Заголовок PR
    :param body: Описание PR, учитываются первые 2000 символов
    :param head_branch: Имя ветки
    :return: Объединенный текст
    """
    return f"{title.lower()} {(body or '').lower()[:BODY_LIMIT]} {head_branch.lower()}"


def classify(files: Sequence[str], title: str, body: str, head_branch: str) -> Classification:
    """Определить тип PR.

    :param files: Пути измененных файлов
    :param title: Заголовок PR
    :param body: Описание PR
    :param head_branch: Имя ветки с изменениями
    :return: Классификация с описанием сработавшего правила
    """
    data = ClassificationInput(files=tuple(files), text=build_text(title, body, head_branch))
    for rule in RULES:
        if rule.matches(data):
            return Classification(pr_type=rule.pr_type, evidence=rule.evidence)
    return Classification(pr_type=PRType.CHORE)


def has_security_files(files: Sequence[str]) -> bool:
    """Проверить, затрагивает ли PR файлы, связанные с безопасностью."""
    return any(SECURITY_PATTERN.search(path) for path in files)


def has_ci_files(files: Sequence[str]) -> bool:
    """Проверить, затрагивает ли PR хотя бы один файл CI."""
    return any(CI_PATTERN.search(path) for path in files)
