import anthropic

from core.errors import ProviderError


class ClaudeBackend:
    """Anthropic Messages API."""

    name = "claude"

    def __init__(self, *, api_key, model, timeout=60.0, client=None):
        self.model = model
        self.client = client or anthropic.Anthropic(
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
        )

    def complete(self, system_prompt, user_prompt, *, max_tokens, temperature) -> str:
        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except anthropic.APIStatusError as e:
            raise ProviderError(cause=e, detail={"status": e.status_code}) from e
        except anthropic.APITimeoutError as e:
            raise ProviderError(cause=e, detail={"status": "timeout"}) from e
        except anthropic.AnthropicError as e:
            raise ProviderError(cause=e) from e

        text = _as_text_from_claude_result(message)
        if not text:
            raise ProviderError(detail={"body": "empty message content"})
        return text


def _as_text_from_claude_result(message) -> str:
    """Concatenated text blocks of a Messages API response."""
    blocks = getattr(message, "content", None) or []
    parts = []
    for block in blocks:
        if getattr(block, "type", None) == "text":
            parts.append(getattr(block, "text", "") or "")
    return "".join(parts).strip()
