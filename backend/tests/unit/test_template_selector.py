"""Unit tests for the rule-based template selector."""

import pytest

from core.domain.content import ContentMode
from services.template_selector import (
    CHAT_TEMPLATES,
    CLIP_TEMPLATES,
    SOCIAL_TEMPLATES,
    STREAM_TEMPLATES,
    TOPIC_RULES,
    VIDEO_SCRIPT_TEMPLATES,
    classify_topic,
    normalize_mode,
    select_content,
    select_video_script,
)


class TestClassifyTopic:
    @pytest.mark.parametrize(
        "message,topic",
        [
            ("best productivity tips", "productivity"),
            ("my favourite pasta RECIPE", "cooking"),
            ("30 minute workout", "fitness"),
            ("new game launch", "gaming"),
            ("how to make money online", "business"),
            ("a song that changed my life", "music"),
            ("asdf qwerty", "general"),
            ("", "general"),
        ],
    )
    def test_topics(self, message, topic):
        assert classify_topic(message) == topic

    def test_first_matching_rule_wins(self):
        """Productivity is checked before cooking and gaming."""
        assert classify_topic("cooking tips for gamers") == "productivity"
        assert classify_topic("stream my workout") == "fitness"

    def test_rule_order(self):
        assert [rule.topic for rule in TOPIC_RULES] == [
            "productivity",
            "cooking",
            "fitness",
            "gaming",
            "business",
            "music",
        ]

    def test_substring_match(self):
        """Keywords match inside longer words."""
        assert classify_topic("cookbook review") == "cooking"


class TestNormalizeMode:
    @pytest.mark.parametrize(
        "mode,expected",
        [
            ("chat", ContentMode.CHAT),
            ("SOCIAL", ContentMode.SOCIAL),
            ("twitch", ContentMode.STREAM),
            ("clips", ContentMode.CLIP),
            (None, ContentMode.CHAT),
            ("", ContentMode.CHAT),
            ("podcast", ContentMode.CHAT),
        ],
    )
    def test_modes(self, mode, expected):
        assert normalize_mode(mode) == expected


class TestSelectContent:
    def test_productivity_chat(self):
        content = select_content("best productivity tips", "chat")

        assert "PRODUCTIVITY HACK" in content
        assert '"best productivity tips"' in content

    def test_general_social(self):
        content = select_content("asdf qwerty", "social")

        assert content.startswith("✨ SMART CONTENT ALERT!")
        assert '"asdf qwerty"' in content

    def test_is_deterministic(self):
        assert select_content("new game tonight", "stream") == select_content("new game tonight", "stream")

    def test_alias_matches_canonical_mode(self):
        assert select_content("new game tonight", "twitch") == select_content("new game tonight", "stream")
        assert select_content("money moves", "clips") == select_content("money moves", "clip")

    def test_unknown_mode_uses_chat(self):
        assert select_content("fitness goals", "podcast") == select_content("fitness goals", "chat")

    def test_message_with_braces_is_inserted_verbatim(self):
        content = select_content("use {curly} braces", "chat")
        assert '"use {curly} braces"' in content

    @pytest.mark.parametrize(
        "table",
        [CHAT_TEMPLATES, VIDEO_SCRIPT_TEMPLATES, SOCIAL_TEMPLATES, STREAM_TEMPLATES, CLIP_TEMPLATES],
    )
    def test_every_table_has_general_fallback(self, table):
        assert "general" in table
        for template in table.values():
            assert "{message}" in template


class TestSelectVideoScript:
    def test_chat_and_social_share_video_scripts(self):
        message = "quick dinner recipe"
        assert select_video_script(message, "chat") == select_video_script(message, "video")
        assert select_video_script(message, "social") == select_video_script(message, "video")

    def test_stream_and_clip_use_own_tables(self):
        assert select_video_script("asdf", "stream") == STREAM_TEMPLATES["general"].format(message="asdf")
        assert select_video_script("asdf", "clip") == CLIP_TEMPLATES["general"].format(message="asdf")
