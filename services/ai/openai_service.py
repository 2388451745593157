import openai
from openai import OpenAI

from core.errors import ProviderError


class OpenAIChatBackend:
    """
    OpenAI-compatible chat completions.
    Used for OpenRouter (base_url + attribution headers) and OpenAI itself.
    """

    def __init__(
            self,
            *,
            api_key,
            model,
            base_url=None,
            default_headers=None,
            timeout=60.0,
            client=None,
    ):
        self.name = "openrouter" if base_url and "openrouter" in base_url else "openai"
        self.model = model
        # the SDK retries by default; retrying is the caller's call
        self.client = client or OpenAI(
            api_key=api_key,
            base_url=base_url,
            default_headers=default_headers,
            timeout=timeout,
            max_retries=0,
        )

    def complete(self, system_prompt, user_prompt, *, max_tokens, temperature) -> str:
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except openai.APIStatusError as e:
            raise ProviderError(
                cause=e,
                detail={"status": e.status_code, "body": e.body},
            ) from e
        except openai.APITimeoutError as e:
            raise ProviderError(cause=e, detail={"status": "timeout"}) from e
        except openai.OpenAIError as e:
            raise ProviderError(cause=e) from e

        choices = getattr(completion, "choices", None) or []
        if not choices:
            raise ProviderError(detail={"body": "no choices in response"})
        content = getattr(getattr(choices[0], "message", None), "content", None)
        text = (content or "").strip() if isinstance(content, str) else ""
        if not text:
            raise ProviderError(detail={"body": "empty message content"})
        return text

