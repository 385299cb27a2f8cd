"""
AI Commit

Commit message generation from staged git changes via a chat-completion API.
"""

__version__ = "1.0.0"

# Name used for the console script, the config directory and user-facing hints
APP_NAME = "ai-commit"
