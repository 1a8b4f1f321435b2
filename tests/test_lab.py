"""Tests for promptcraft.engine.lab module."""

from unittest.mock import AsyncMock, patch

import pytest

from promptcraft.engine import PromptLab
from promptcraft.errors import NothingToDoError
from promptcraft.prompts import DocumentKind, ImageFields, NotionFields, NotionKind, StoryFields
from promptcraft.prompts.fields import DEFAULT_TASK


class TestPromptLab:
    """Tests for PromptLab class."""

    @pytest.fixture
    def lab(self, settings, rng):
        return PromptLab(settings, rng=rng)

    def test_initial_state_uses_image_settings(self, settings, rng):
        """Test that image state starts from the configured defaults."""
        settings = settings.model_copy(update={"image_aspect": "1:1", "image_profile": False})
        state = PromptLab(settings, rng=rng).initial_state(DocumentKind.IMAGE)

        assert isinstance(state, ImageFields)
        assert state.aspect == "1:1"
        assert state.profile is False

    def test_parse_applies_default_task(self, lab):
        """Test that a story without a role gets the default task."""
        state = lab.parse(DocumentKind.STORY, "a fantasy quest")

        assert state.task == DEFAULT_TASK
        assert state.genre == "Fantasy"
        assert state.storyline == "a fantasy quest"

    def test_parse_keeps_extracted_task(self, lab):
        """Test that an extracted role is kept."""
        state = lab.parse(DocumentKind.STORY, "act as a bard")
        assert state.task == "Act as a bard"

    def test_parse_merges_into_given_state(self, lab):
        """Test that parsing returns a merged copy of the given state."""
        state = StoryFields(task_rules=("Rhyme",), max_words=300)
        updated = lab.parse(DocumentKind.STORY, "a horror tale", state)

        assert updated.task_rules == ("Rhyme",)
        assert updated.max_words == 300
        assert updated.genre == "Horror"
        assert state.genre == ""

    def test_parse_rejects_blank_input(self, lab):
        """Test that blank input raises before extracting."""
        with pytest.raises(NothingToDoError) as exc_info:
            lab.parse(DocumentKind.IMAGE, "   ")
        assert exc_info.value.title == "Input required"

    def test_delay_for(self, settings, rng):
        """Test that only non-story kinds wait."""
        lab = PromptLab(settings.model_copy(update={"generation_delay": 1.0}), rng=rng)

        assert lab.delay_for(DocumentKind.STORY) == 0.0
        assert lab.delay_for(DocumentKind.IMAGE) == 1.0
        assert lab.delay_for("threads") == 1.0

    def test_stores_per_kind(self, lab, settings):
        """Test that notion gets its own store."""
        assert lab.store_for(DocumentKind.NOTION).path == settings.notion_path
        assert lab.store_for(DocumentKind.VIDEO).path == settings.library_path


class TestGenerate:
    """Tests for the async generation path."""

    @pytest.fixture
    def slow_lab(self, settings, rng):
        return PromptLab(settings.model_copy(update={"generation_delay": 1.5}), rng=rng)

    async def test_waits_before_parsing(self, slow_lab):
        """Test that generate sleeps for the configured delay."""
        mock_sleep = AsyncMock()
        with patch("asyncio.sleep", mock_sleep):
            state = await slow_lab.generate(DocumentKind.VIDEO, "slow vertical pan")

        mock_sleep.assert_awaited_once_with(1.5)
        assert state.aspect == "9:16"
        assert state.motion == "low"

    async def test_story_does_not_wait(self, slow_lab):
        """Test that story generation is immediate."""
        mock_sleep = AsyncMock()
        with patch("asyncio.sleep", mock_sleep):
            await slow_lab.generate(DocumentKind.STORY, "a comedy")

        mock_sleep.assert_not_awaited()

    async def test_blank_input_fails_before_waiting(self, slow_lab):
        """Test that blank input fails without sleeping."""
        mock_sleep = AsyncMock()
        with patch("asyncio.sleep", mock_sleep):
            with pytest.raises(NothingToDoError):
                await slow_lab.generate(DocumentKind.THREADS, "")

        mock_sleep.assert_not_awaited()

    async def test_notion_uses_selected_kind(self, lab_without_delay):
        """Test that notion generation follows the selected kind."""
        state = NotionFields(kind=NotionKind.TABLE)
        updated = await lab_without_delay.generate(DocumentKind.NOTION, "a: 1\nb: 2", state)

        assert "| a | 1 |" in updated.output

    async def test_generate_and_save(self, lab_without_delay, settings):
        """Test that the generated document is saved to its store."""
        state, document = await lab_without_delay.generate_and_save(
            DocumentKind.THREADS, "Alice: Hi\nBob: Hello"
        )

        assert document.kind == DocumentKind.THREADS
        assert document.data.generated_prompt == state.generated_prompt
        assert lab_without_delay.store_for(DocumentKind.THREADS).get(document.id) is not None

    @pytest.fixture
    def lab_without_delay(self, settings, rng):
        return PromptLab(settings, rng=rng)


class TestSaveAndCopy:
    """Tests for saving and copying lab output."""

    @pytest.fixture
    def lab(self, settings, rng):
        return PromptLab(settings, rng=rng)

    def test_save_story(self, lab, created_at):
        """Test saving a parsed story."""
        state = lab.parse(DocumentKind.STORY, "Act as a bard, a fantasy tale")
        document = lab.save(DocumentKind.STORY, state, created_at=created_at)

        assert document.name == "Fantasy: Act as a bard (09:05)"
        assert lab.store_for(DocumentKind.STORY).list() == [document]

    def test_notion_saves_to_notion_store(self, lab, settings):
        """Test that notion documents skip the main library."""
        state = lab.parse(DocumentKind.NOTION, "Some notes. More notes.")
        lab.save(DocumentKind.NOTION, state)

        assert settings.notion_path.exists()
        assert not settings.library_path.exists()

    def test_save_without_output_fails(self, lab):
        """Test that nothing is stored when there is no output."""
        with pytest.raises(NothingToDoError):
            lab.save(DocumentKind.VIDEO, lab.initial_state(DocumentKind.VIDEO))
        assert lab.store_for(DocumentKind.VIDEO).list() == []

    def test_copy_text(self, lab):
        """Test the copy text for a parsed video."""
        state = lab.parse(DocumentKind.VIDEO, "square ocean")
        assert lab.copy_text(DocumentKind.VIDEO, state) == (
            "/imagine square ocean --ar 1:1 --motion high --video 1"
        )
