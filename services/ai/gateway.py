import time

from flask import current_app

from core.errors import ProviderError
from prompt_management.build_prompt import build_prompt


class ProviderGateway:
    """
    One provider call per target.
      - prompt = target guidance + tone guidance (unknown ids pass through)
      - every failure surfaces as ProviderError(target=...)
      - no retries here; the caller decides
    """

    def __init__(self, backend, *, max_tokens=1000, temperature=0.7):
        self.backend = backend
        self.max_tokens = max_tokens
        self.temperature = temperature

    def generate(self, text, target, tone) -> str:
        system_prompt, user_prompt = build_prompt(text, target, tone)
        backend_name = getattr(self.backend, "name", type(self.backend).__name__)

        current_app.logger.info("[PROVIDER] generating target=%s backend=%s", target, backend_name)
        start = time.perf_counter()
        try:
            output = self.backend.complete(
                system_prompt,
                user_prompt,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except ProviderError as e:
            current_app.logger.error(
                "[PROVIDER] failed target=%s backend=%s detail=%r cause=%r",
                target, backend_name, e.detail, e.cause,
            )
            raise ProviderError(target=target, cause=e.cause or e, detail=e.detail) from e

        latency_ms = int((time.perf_counter() - start) * 1000)
        current_app.logger.info(
            "[PROVIDER] ok target=%s chars=%s latency_ms=%s", target, len(output), latency_ms
        )
        return output


def get_provider_gateway() -> ProviderGateway:
    return current_app.extensions["provider_gateway"]
