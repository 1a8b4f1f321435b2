"""Tests for the story, image, video and threads extractors."""

import random

from promptcraft.engine import create_extractors, extract
from promptcraft.engine.extractors.image import SREF_CODES, ImageExtractor
from promptcraft.engine.extractors.story import StoryExtractor
from promptcraft.engine.extractors.threads import CLOSING, PREAMBLE, compose_prompt, parse_turns
from promptcraft.engine.extractors.video import VideoExtractor
from promptcraft.prompts import DocumentKind, ImageFields, StoryFields, VideoFields


class TestStoryExtractor:
    """Tests for StoryExtractor."""

    def extract(self, text):
        return StoryExtractor().extract(text, StoryFields())

    def test_full_description(self):
        """Test genre, task, flags and word limits in one description."""
        fields = self.extract("Act as a bard, tell a fantasy tale with cussing, 200 max words and 50 min words")

        assert fields["task"] == "Act as a bard"
        assert fields["genre"] == "Fantasy"
        assert fields["cussing"] is True
        assert "vulgar" not in fields
        assert fields["max_words"] == 200
        assert fields["min_words"] == 50
        assert fields["storyline"].startswith("Act as a bard")

    def test_first_genre_in_scan_order_wins(self):
        """Test sci-fi beats horror because it is scanned first."""
        fields = self.extract("a horror story set in a sci-fi colony")
        assert fields["genre"] == "Sci-fi"

    def test_be_a_pattern(self):
        """Test that "be a" is rewritten as "Act as"."""
        fields = self.extract("Please be a pirate captain. Go")
        assert fields["task"] == "Act as a pirate captain"

    def test_act_as_keeps_original_case(self):
        """Test that the role keeps its original casing."""
        fields = self.extract("ACT AS The Narrator")
        assert fields["task"] == "Act as The Narrator"

    def test_act_as_runs_to_end_of_text(self):
        """Test a role with no trailing punctuation."""
        fields = self.extract("act as a wizard")
        assert fields["task"] == "Act as a wizard"

    def test_no_matches_returns_only_storyline(self):
        """Test unmatched categories are left out of the partial."""
        fields = self.extract("nothing in particular")
        assert fields == {"storyline": "nothing in particular"}

    def test_oversized_word_limit_does_not_raise(self):
        """Test that an unconvertible digit run coerces to 0 instead of raising."""
        fields = self.extract("9" * 5000 + " max words and " + "8" * 5000 + " min words")

        assert fields["max_words"] == 0
        assert fields["min_words"] == 0

    def test_vulgar_keywords(self):
        """Test that vulgar keywords set the vulgar flag."""
        assert self.extract("an adult drama")["vulgar"] is True

    def test_unmatched_fields_keep_prior_state(self):
        """Test merging a partial preserves values it did not mention."""
        state = StoryFields(genre="Horror", max_words=300)
        merged = state.merge(StoryExtractor().extract("a quiet walk", state))

        assert merged.genre == "Horror"
        assert merged.max_words == 300
        assert merged.storyline == "a quiet walk"


class TestImageExtractor:
    """Tests for ImageExtractor."""

    def test_defaults_for_plain_subject(self, rng):
        """Test the fallbacks when no keyword matches."""
        fields = ImageExtractor(rng).extract("a cat", ImageFields())

        assert fields["subject"] == "a cat"
        assert fields["medium"] == "photo"
        assert fields["environment"] == "outdoors"
        assert fields["lighting"] == "cinematic"
        assert fields["color"] == "vibrant"
        assert fields["mood"] == "energetic"
        assert fields["composition"] == "closeup"
        assert fields["sref"] in SREF_CODES

    def test_keyword_classification(self, rng):
        """Test that each category picks up its keyword."""
        fields = ImageExtractor(rng).extract(
            "A 3D render of an underwater temple, neon, pastel, calm, wide", ImageFields()
        )

        assert fields["medium"] == "3d render"
        assert fields["environment"] == "underwater"
        assert fields["lighting"] == "neon"
        assert fields["color"] == "pastel"
        assert fields["mood"] == "calm"
        assert fields["composition"] == "wide shot"

    def test_first_rule_wins(self, rng):
        """Test 'art' selects painting even when 'sketch' is also present."""
        fields = ImageExtractor(rng).extract("sketch art of a tree", ImageFields())
        assert fields["medium"] == "painting"

    def test_pinned_rng_is_repeatable(self):
        """Test that a seeded rng picks the same sref."""
        first = ImageExtractor(random.Random(7)).extract("a cat", ImageFields())
        second = ImageExtractor(random.Random(7)).extract("a cat", ImageFields())
        assert first["sref"] == second["sref"]


class TestVideoExtractor:
    """Tests for VideoExtractor."""

    def test_defaults(self):
        """Test the default aspect and motion."""
        fields = VideoExtractor().extract("a horse running", VideoFields())
        assert fields == {"idea": "a horse running", "aspect": "91:51", "motion": "high"}

    def test_vertical_slow(self):
        """Test vertical and slow keywords."""
        fields = VideoExtractor().extract("Vertical clip, slow pan over hills", VideoFields())
        assert fields["aspect"] == "9:16"
        assert fields["motion"] == "low"

    def test_square_moderate(self):
        """Test square and moderate keywords."""
        fields = VideoExtractor().extract("square loop with moderate movement", VideoFields())
        assert fields["aspect"] == "1:1"
        assert fields["motion"] == "medium"


class TestThreads:
    """Tests for conversation parsing and prompt composition."""

    def test_two_speakers(self):
        """Test that speaker turns are separated by blank lines."""
        prompt = extract(DocumentKind.THREADS, "Alice: Hi\nBob: Hello there\n\nAlice: How are you?")["generated_prompt"]

        assert prompt == (
            f"{PREAMBLE}\n\nAlice: Hi\n\nBob: Hello there\n\nAlice: How are you?\n\n{CLOSING}"
        )

    def test_unattributed_line_continues_previous_speaker(self):
        """Test that a line without a speaker joins the previous turn."""
        prompt = extract(DocumentKind.THREADS, "Alice: hello\nhow are you\nBob: fine thanks")["generated_prompt"]

        assert parse_turns("Alice: hello\nhow are you\nBob: fine thanks") == [
            "Alice: hello\nhow are you",
            "Bob: fine thanks",
        ]
        assert prompt.startswith(f"{PREAMBLE}\n\nAlice: hello\nhow are you\n\nBob: fine thanks")
        assert prompt.endswith(CLOSING)

    def test_continuation_lines_join_current_turn(self):
        """Test that continuation lines are stripped and joined."""
        turns = parse_turns("Alice: first line\n  second line  \nBob: ok")
        assert turns == ["Alice: first line\nsecond line", "Bob: ok"]

    def test_lines_before_any_speaker_stand_alone(self):
        """Test that leading text without a speaker is its own turn."""
        turns = parse_turns("intro text\nAlice: hi")
        assert turns == ["intro text", "Alice: hi"]

    def test_empty_conversation_still_composes(self):
        """Test that no turns still yields the preamble and closing."""
        assert compose_prompt([]) == f"{PREAMBLE}\n\n\n\n{CLOSING}"


class TestCreateExtractors:
    """Tests for the extractor registry."""

    def test_one_per_kind(self):
        """Test that the registry has one extractor per kind."""
        extractors = create_extractors()
        assert set(extractors) == set(DocumentKind)
        for kind, extractor in extractors.items():
            assert extractor.kind == kind

    def test_extract_uses_default_state(self):
        """Test that extract works without a prior state."""
        fields = extract(DocumentKind.VIDEO, "widescreen ocean")
        assert fields["aspect"] == "16:9"

    def test_extractors_never_raise_on_empty_input(self):
        """Test that every extractor accepts empty text."""
        for kind in DocumentKind:
            assert isinstance(extract(kind, ""), dict)
