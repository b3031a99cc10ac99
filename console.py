#!/usr/bin/env python3

"""
Console Output - Colored, level-tagged messages for the terminal.
"""

import os
import sys

# ============================================================================
# Colors
# ============================================================================
RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
NC = "\033[0m"

BANNER_WIDTH = 80


def use_color() -> bool:
    if os.getenv("NO_COLOR"):
        return False
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def colorize(text, color):
    if not use_color():
        return text
    return f"{color}{text}{NC}"


def print_info(message):
    print(f"{colorize('[INFO]', BLUE)} {message}")


def print_success(message):
    print(f"{colorize('[SUCCESS]', GREEN)} {message}")


def print_warning(message):
    print(f"{colorize('[WARNING]', YELLOW)} {message}")


def print_error(message):
    print(f"{colorize('[ERROR]', RED)} {message}")


def print_banner(title):
    print("=" * BANNER_WIDTH)
    print(title)
    print("=" * BANNER_WIDTH)
