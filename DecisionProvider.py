#!/usr/bin/env python3

"""
Decision Providers - Yes/no answers for the interactive steps of an install.
"""

from abc import ABC, abstractmethod

# ============================================================================
# Decision Keys
# ============================================================================
REPLACE_EXISTING = "replace_existing"
PULL_MODEL = "pull_model"

YES_ANSWERS = ("y", "yes")


class DecisionProvider(ABC):
    """Answers yes/no questions. Every question defaults to no."""

    @abstractmethod
    def confirm(self, key, question) -> bool:
        pass


class ConsoleDecisions(DecisionProvider):
    """Reads the answer from the terminal."""

    def __init__(self, input_func=None):
        self._input = input_func or input

    def confirm(self, key, question) -> bool:
        try:
            reply = self._input(f"{question} (y/N): ")
        except EOFError:
            print()
            return False
        return reply.strip().lower() in YES_ANSWERS


class FixedDecisions(DecisionProvider):
    """Scripted answers by decision key, used for non-interactive runs."""

    def __init__(self, answers=None, default=False):
        self.answers = dict(answers or {})
        self.default = default
        self.asked = []

    def confirm(self, key, question) -> bool:
        self.asked.append(key)
        return self.answers.get(key, self.default)
