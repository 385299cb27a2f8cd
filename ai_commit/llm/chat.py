"""Chat-completion client for OpenAI-compatible endpoints."""

import http.client
import urllib.error
import urllib.request

from ai_commit.config import EffectiveParameters
from ai_commit.llm.base import (
    BadStatusError,
    ChatRequest,
    ChatResponse,
    EmptyChoicesError,
    EmptyDiffError,
    LLMClient,
    LLMResponse,
    ParseFailureError,
    TransportError,
)
from ai_commit.prompts.builder import PromptBuilder


class ChatCompletionClient(LLMClient):
    """Single-shot client: one POST per message, no retries.

    No timeout is passed to urlopen, so a hung endpoint blocks until the
    process is interrupted.
    """

    def __init__(self, params: EffectiveParameters, builder: PromptBuilder | None = None):
        self.params = params
        self.builder = builder or PromptBuilder()

    @property
    def name(self) -> str:
        return f"{self.params.model} @ {self.params.url}"

    def build_request(self, diff: str) -> ChatRequest:
        return self.builder.build(diff, self.params)

    def _post(self, request: ChatRequest) -> tuple[int, str, str]:
        """Send the request and return (status, reason, body) for any HTTP answer."""
        try:
            req = urllib.request.Request(
                self.params.url,
                data=request.to_json(),
                method="POST",
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.params.api_key}",
                },
            )
        except ValueError as e:
            raise TransportError("Failed to send request", str(e))

        try:
            with urllib.request.urlopen(req) as response:
                return response.status, response.reason, self._read_body(response)
        except urllib.error.HTTPError as e:
            # Non-2xx: urllib raises, but the body is still on the error
            try:
                return e.code, str(e.reason or ""), self._read_body(e)
            finally:
                e.close()
        except urllib.error.URLError as e:
            raise TransportError("Failed to send request", str(e.reason))
        except (http.client.HTTPException, OSError) as e:
            raise TransportError("Failed to send request", str(e) or type(e).__name__)

    def _read_body(self, response) -> str:
        try:
            return response.read().decode('utf-8', errors='replace')
        except (http.client.HTTPException, OSError) as e:
            raise TransportError("Failed to read response body", str(e) or type(e).__name__)

    def generate(self, diff: str) -> LLMResponse:
        """Ask the endpoint for a commit message describing ``diff``.

        Raises:
            EmptyDiffError: diff is empty; nothing is sent.
            TransportError: connection, DNS or read failure.
            BadStatusError: non-2xx status; carries status and raw body.
            ParseFailureError: 2xx body that is not a chat-completion response.
            EmptyChoicesError: 2xx response with no choices.
        """
        if not diff:
            raise EmptyDiffError()

        status, reason, body = self._post(self.build_request(diff))

        if not 200 <= status < 300:
            raise BadStatusError(status, body, reason)

        try:
            parsed = ChatResponse.parse(body)
        except (ValueError, RecursionError) as e:
            # json.loads hits the recursion limit on deeply nested bodies
            raise ParseFailureError(str(e) or type(e).__name__, body)

        if not parsed.choices:
            raise EmptyChoicesError(body)

        return LLMResponse(
            content=parsed.choices[0].message.content,
            model=self.params.model,
            tokens_used=parsed.total_tokens,
        )
