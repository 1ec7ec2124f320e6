"""
Общие фикстуры с моками PyGithub.
"""

from unittest.mock import MagicMock

import pytest


def make_file(path: str) -> MagicMock:
    """Мок для измененного файла."""
    mock = MagicMock()
    mock.filename = path
    return mock


def make_review(login: str, state: str) -> MagicMock:
    """Мок для отзыва ревьюера."""
    mock = MagicMock()
    mock.user.login = login
    mock.state = state
    return mock


def make_pull(number: int, title: str, author: str, files: list[str]) -> MagicMock:
    """Мок для открытого PR."""
    mock = MagicMock()
    mock.number = number
    mock.title = title
    mock.user.login = author
    mock.get_files.return_value = [make_file(path) for path in files]
    return mock


@pytest.fixture
def mock_pr() -> MagicMock:
    """Мок для текущего PR."""
    pr = MagicMock()
    pr.number = 123
    pr.title = "Fix token refresh"
    pr.body = "Resolves expired session handling"
    pr.user.login = "alice"
    pr.base.ref = "main"
    pr.head.ref = "fix/token-refresh"
    pr.created_at = None
    pr.updated_at = None
    pr.draft = False
    pr.mergeable = True
    pr.mergeable_state = "blocked"
    pr.additions = 40
    pr.deletions = 5
    pr.changed_files = 2
    pr.html_url = "https://github.com/owner/repo/pull/123"
    pr.labels = []
    pr.requested_reviewers = []
    pr.requested_teams = []
    pr.get_files.return_value = [make_file("src/auth/refresh.py"), make_file("tests/test_refresh.py")]
    pr.get_reviews.return_value = []
    pr.get_issue_comments.return_value = []
    pr.create_issue_comment.return_value = MagicMock(id=999)
    return pr


@pytest.fixture
def mock_repo(mock_pr: MagicMock) -> MagicMock:
    """Мок для репозитория."""
    repo = MagicMock()
    repo.get_pull.return_value = mock_pr
    repo.get_pulls.return_value = [
        make_pull(123, "Fix token refresh", "alice", ["src/auth/refresh.py", "tests/test_refresh.py"]),
        make_pull(120, "Session rework", "bob", ["src/auth/refresh.py", "tests/test_refresh.py", "src/x.py"]),
        make_pull(118, "Docs", "carol", ["README.md"]),
    ]
    return repo


@pytest.fixture
def mock_github(mock_repo: MagicMock) -> MagicMock:
    """Мок для GitHub API."""
    github = MagicMock()
    github.get_repo.return_value = mock_repo
    counts = {"is:merged": 11, "is:closed is:unmerged": 0, "is:open": 1}

    def search_issues(query: str) -> MagicMock:
        result = MagicMock()
        result.totalCount = next(v for k, v in counts.items() if query.endswith(k))
        return result

    github.search_issues.side_effect = search_issues
    return github
