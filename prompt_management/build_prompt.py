# build_prompt.py
from __future__ import annotations

from domain.catalog import target_guidance, tone_guidance
from prompt_management import templates


def build_prompt(input_text, target, tone):
    """
    Builds (system_prompt, user_prompt) for one target.

    target / tone:
      - catalog ids ("instagram", "casual", ...) expand to their guidance
      - unknown ids are embedded verbatim
    """
    system_prompt = templates.SYSTEM_PROMPT_TEMPLATE.format(
        target_guidance=target_guidance(target),
        tone_guidance=tone_guidance(tone),
    )
    # str.format does not re-scan substituted values, braces in user text are safe
    user_prompt = templates.USER_PROMPT_TEMPLATE.format(content=input_text)
    return system_prompt, user_prompt
