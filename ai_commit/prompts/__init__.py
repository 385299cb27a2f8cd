"""Prompt Construction Package"""

from ai_commit.prompts.builder import PromptBuilder, SYSTEM_TEMPLATE, USER_TEMPLATE

__all__ = [
    "PromptBuilder",
    "SYSTEM_TEMPLATE",
    "USER_TEMPLATE",
]
