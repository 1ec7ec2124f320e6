"""Команды GitHub Actions: outputs и аннотации."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def set_github_output(name: str, value: str) -> None:
    """Установить output для GitHub Actions.

    Вне runner'а, когда ``GITHUB_OUTPUT`` не задан, значение только логируется:
    команда ``::set-output`` отключена в GitHub Actions.

    :param name: Имя переменной
    :param value: Значение переменной
    """
    github_output = os.environ.get("GITHUB_OUTPUT")

    if not github_output:
        logger.info(f"GITHUB_OUTPUT не задан, output {name}={value} не записан")
        return

    with Path(github_output).open("a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")


def annotate(level: str, message: str) -> None:
    """Вывести аннотацию (``error``, ``warning`` или ``notice``) в лог workflow."""
    print(f"::{level}::{message}")
