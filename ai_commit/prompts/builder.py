"""Prompt Builder - Construct the chat request for commit message generation."""

from ai_commit.config import EffectiveParameters
from ai_commit.llm.base import ChatMessage, ChatRequest

SYSTEM_TEMPLATE = (
    "You are a helpful assistant that generates commit messages in {language}. "
    "The user will provide a git diff, and you should generate a concise and "
    "informative commit message. {prompt}"
)

USER_TEMPLATE = "Here is the git diff:\n```\n{diff}\n```"


class PromptBuilder:
    """Builds the two-message conversation sent to the endpoint."""

    def build(self, diff: str, params: EffectiveParameters) -> ChatRequest:
        return ChatRequest(
            model=params.model,
            messages=[
                ChatMessage(role="system", content=self.build_system_prompt(params.language, params.prompt)),
                ChatMessage(role="user", content=self.build_user_prompt(diff)),
            ],
        )

    def build_system_prompt(self, language: str, prompt: str) -> str:
        return SYSTEM_TEMPLATE.format(language=language, prompt=prompt)

    def build_user_prompt(self, diff: str) -> str:
        return USER_TEMPLATE.format(diff=diff)
