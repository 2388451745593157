"""
Unit tests for the target/tone catalog and prompt construction.
"""

from domain.catalog import TARGET_IDS, TONE_IDS, catalog_dict, target_guidance, tone_guidance
from prompt_management.build_prompt import build_prompt


class TestCatalog:

    def test_known_ids(self):
        assert TARGET_IDS == ["instagram", "facebook", "linkedin", "twitter"]
        assert TONE_IDS == ["professional", "casual", "viral", "friendly"]
        assert "max 280 characters" in target_guidance("twitter")
        assert tone_guidance("casual").startswith("Casual:")

    def test_unknown_ids_fall_back_verbatim(self):
        assert target_guidance("mastodon") == "mastodon"
        assert tone_guidance("sarcastic") == "sarcastic"

    def test_catalog_dict(self):
        data = catalog_dict()

        assert data["targets"][0] == {"id": "instagram", "label": "Instagram"}
        assert {"id": "viral", "label": "Viral"} in data["tones"]


class TestBuildPrompt:

    def test_embeds_guidance_and_content(self):
        system_prompt, user_prompt = build_prompt("Launch day!", "linkedin", "professional")

        assert "repurpose the given content for LinkedIn (professional, insightful" in system_prompt
        assert "Tone: Professional: formal, authoritative" in system_prompt
        assert "Only output the final post content, nothing else" in system_prompt
        assert user_prompt == "Please repurpose this content:\n\nLaunch day!"

    def test_unknown_target_and_tone_pass_through(self):
        system_prompt, _ = build_prompt("x", "threads", "deadpan")

        assert "repurpose the given content for threads." in system_prompt
        assert "Tone: deadpan" in system_prompt

    def test_braces_in_content_are_literal(self):
        _, user_prompt = build_prompt("use {curly} braces", "twitter", "casual")

        assert user_prompt.endswith("use {curly} braces")
