"""Tests for field-edit text surgery and full-prompt normalization."""

from __future__ import annotations

import pytest

from models.prompt_models import StructuredPrompt
from services.prompt_text import apply_field_edit, normalize_full_prompt


class TestNormalizeFullPrompt:
    def test_trims_and_drops_empty_segments(self) -> None:
        assert normalize_full_prompt("  a cat ,, sitting ,  ,on a mat ") == "a cat, sitting, on a mat"

    def test_blank_input(self) -> None:
        assert normalize_full_prompt(" , ,  ") == ""

    @pytest.mark.parametrize(
        "text",
        ["a cat, sitting", "a,,b", " lead, trail ,", "", "no commas at all", ",,,"],
    )
    def test_idempotent(self, text: str) -> None:
        once = normalize_full_prompt(text)
        assert normalize_full_prompt(once) == once


class TestApplyFieldEdit:
    def test_replaces_old_value_in_full_prompt(self) -> None:
        prompt = StructuredPrompt(scene="a cat", full_prompt="a cat, sitting")
        updated = apply_field_edit(prompt, "scene", "a dog")
        assert updated.scene == "a dog"
        assert updated.full_prompt == "a dog, sitting"

    def test_appends_when_field_was_empty(self) -> None:
        prompt = StructuredPrompt(texture="", full_prompt="a cat")
        updated = apply_field_edit(prompt, "texture", "glossy")
        assert updated.texture == "glossy"
        assert updated.full_prompt == "a cat, glossy"

    def test_new_value_becomes_full_prompt_when_blank(self) -> None:
        prompt = StructuredPrompt(full_prompt="   ")
        updated = apply_field_edit(prompt, "lighting", "rim light")
        assert updated.full_prompt == "rim light"

    def test_only_first_occurrence_is_replaced(self) -> None:
        prompt = StructuredPrompt(style="red", full_prompt="red car, red sky")
        updated = apply_field_edit(prompt, "style", "blue")
        assert updated.full_prompt == "blue car, red sky"

    def test_missing_old_value_leaves_text_and_normalizes(self) -> None:
        prompt = StructuredPrompt(scene="a  cat", full_prompt="a cat ,sitting,,")
        updated = apply_field_edit(prompt, "scene", "a dog")
        assert updated.scene == "a dog"
        assert updated.full_prompt == "a cat, sitting"

    def test_clearing_a_field_removes_its_segment(self) -> None:
        prompt = StructuredPrompt(scene="a cat", lighting="dusk", full_prompt="a cat, dusk")
        updated = apply_field_edit(prompt, "lighting", "")
        assert updated.lighting == ""
        assert updated.full_prompt == "a cat"

    def test_blank_to_blank_only_normalizes(self) -> None:
        prompt = StructuredPrompt(full_prompt="a cat,  sitting ,")
        updated = apply_field_edit(prompt, "details", "  ")
        assert updated.details == "  "
        assert updated.full_prompt == "a cat, sitting"

    def test_other_fields_untouched(self) -> None:
        prompt = StructuredPrompt(scene="a cat", style="oil", full_prompt="a cat, oil")
        updated = apply_field_edit(prompt, "imageType", "painting")
        assert updated.scene == "a cat"
        assert updated.style == "oil"
        assert updated.image_type == "painting"
        assert updated.full_prompt == "a cat, oil, painting"

    def test_rejects_full_prompt_and_unknown_fields(self) -> None:
        prompt = StructuredPrompt(full_prompt="x")
        with pytest.raises(ValueError):
            apply_field_edit(prompt, "fullPrompt", "y")
        with pytest.raises(ValueError):
            apply_field_edit(prompt, "mood", "y")

    def test_original_prompt_is_not_mutated(self) -> None:
        prompt = StructuredPrompt(scene="a cat", full_prompt="a cat")
        apply_field_edit(prompt, "scene", "a dog")
        assert prompt.scene == "a cat"
        assert prompt.full_prompt == "a cat"
