from services.ai.claude_service import ClaudeBackend
from services.ai.openai_service import OpenAIChatBackend

PROVIDER_ALLOW = ("openrouter", "openai", "claude")


def build_backend(cfg):
    """Provider backend chosen by PROVIDER_DEFAULT. Unknown values fall back to openrouter."""
    provider = (cfg.get("PROVIDER_DEFAULT") or "openrouter").lower()
    timeout = cfg.get("PROVIDER_TIMEOUT", 60.0)

    if provider == "claude":
        return ClaudeBackend(
            api_key=cfg.get("ANTHROPIC_API_KEY") or "",
            model=cfg.get("CLAUDE_MODEL"),
            timeout=timeout,
        )
    if provider == "openai":
        return OpenAIChatBackend(
            api_key=cfg.get("OPENAI_API_KEY") or "",
            model=cfg.get("OPENAI_MODEL"),
            timeout=timeout,
        )
    return OpenAIChatBackend(
        api_key=cfg.get("OPENROUTER_API_KEY") or "",
        model=cfg.get("OPENROUTER_MODEL"),
        base_url=cfg.get("OPENROUTER_BASE_URL"),
        default_headers={
            "HTTP-Referer": cfg.get("APP_URL") or "",
            "X-Title": cfg.get("APP_TITLE") or "",
        },
        timeout=timeout,
    )
