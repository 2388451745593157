"""Static target and tone catalog.

Both enumerations are configuration data. Lookups never fail: an id the
catalog does not know is used verbatim as its own guidance so newer clients
can send ids this server has not learned yet.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class TargetDescriptor:
    id: str
    label: str
    guidance: str


@dataclass(frozen=True)
class ToneDescriptor:
    id: str
    label: str
    guidance: str


TARGETS = (
    TargetDescriptor(
        "instagram",
        "Instagram",
        "Instagram (use emojis, hashtags, engaging captions, keep it visual-friendly, max 2200 characters)",
    ),
    TargetDescriptor(
        "facebook",
        "Facebook",
        "Facebook (conversational, can be longer, encourage engagement and shares)",
    ),
    TargetDescriptor(
        "linkedin",
        "LinkedIn",
        "LinkedIn (professional, insightful, thought leadership, use line breaks for readability)",
    ),
    TargetDescriptor(
        "twitter",
        "X (Twitter)",
        "X/Twitter (concise, punchy, max 280 characters, use relevant hashtags sparingly)",
    ),
)

TONES = (
    ToneDescriptor(
        "professional",
        "Professional",
        "Professional: formal, authoritative, credible, and business-appropriate",
    ),
    ToneDescriptor(
        "casual",
        "Casual",
        "Casual: relaxed, friendly, conversational, like talking to a friend",
    ),
    ToneDescriptor(
        "viral",
        "Viral",
        "Viral: attention-grabbing, shareable, uses hooks and curiosity gaps",
    ),
    ToneDescriptor(
        "friendly",
        "Friendly",
        "Friendly: warm, approachable, positive, and engaging",
    ),
)

TARGETS_BY_ID = {t.id: t for t in TARGETS}
TONES_BY_ID = {t.id: t for t in TONES}

TARGET_IDS = [t.id for t in TARGETS]
TONE_IDS = [t.id for t in TONES]


def target_guidance(target_id: str) -> str:
    descriptor = TARGETS_BY_ID.get(target_id)
    if descriptor is None:
        return target_id
    return descriptor.guidance


def tone_guidance(tone_id: str) -> str:
    descriptor = TONES_BY_ID.get(tone_id)
    if descriptor is None:
        return tone_id
    return descriptor.guidance


def catalog_dict() -> dict:
    return {
        "targets": [{"id": t.id, "label": t.label} for t in TARGETS],
        "tones": [{"id": t.id, "label": t.label} for t in TONES],
    }
