"""
Terminal output helpers for install-extension tool
"""

import os
import sys

from .constants import GREEN, YELLOW, RED, RESET, NO_COLOR_ENV


def use_color() -> bool:
    """Colorize only interactive terminals that did not opt out"""
    if os.environ.get(NO_COLOR_ENV):
        return False
    return sys.stdout.isatty()


def colorize(message: str, color: str) -> str:
    if not use_color():
        return message
    return f"{color}{message}{RESET}"


def step(message: str) -> None:
    print()
    print(colorize(message, GREEN))


def success(message: str) -> None:
    print(colorize(f"✓ {message}", GREEN))


def warning(message: str) -> None:
    print(colorize(f"⚠ Warning: {message}", YELLOW))


def error(message: str) -> None:
    print(colorize(f"✗ {message}", RED))


def banner(title: str, width: int = 40) -> None:
    print(colorize("=" * width, GREEN))
    print(colorize(title, GREEN))
    print(colorize("=" * width, GREEN))
