from __future__ import annotations

import pytest

from models.prompt_models import FlowStatus
from services.image_editor import EDIT_ERROR, ImageEditFlow


@pytest.fixture
def editor(fake_gateway, uploaded_image) -> ImageEditFlow:
    return ImageEditFlow(fake_gateway, uploaded_image)


@pytest.mark.asyncio
async def test_successful_edit_replaces_result(editor, fake_gateway) -> None:
    assert editor.status is FlowStatus.IDLE
    result = await editor.apply("Add a retro filter")
    assert editor.status is FlowStatus.SUCCESS
    assert result.filename == "edited-image.png"
    assert result.data_url.startswith("data:image/png;base64,")
    assert fake_gateway.edit_calls == ["Add a retro filter"]


@pytest.mark.asyncio
async def test_failure_leaves_slot_empty(editor, fake_gateway) -> None:
    await editor.apply("first")
    fake_gateway.failing.add("edit")
    result = await editor.apply("second")
    assert result is None
    assert editor.status is FlowStatus.ERROR
    assert editor.edited_image is None
    assert editor.error == EDIT_ERROR


@pytest.mark.asyncio
async def test_each_edit_starts_from_the_original(editor, fake_gateway, uploaded_image) -> None:
    seen_images = []

    async def record_edit(image, instruction):
        seen_images.append(image)
        return "data:image/png;base64,AA=="

    fake_gateway.edit_image = record_edit
    await editor.apply("make it blue")
    await editor.apply("make it a watercolor")
    assert seen_images == [uploaded_image, uploaded_image]


@pytest.mark.asyncio
async def test_blank_instruction_rejected(editor, fake_gateway) -> None:
    with pytest.raises(ValueError):
        await editor.apply("   ")
    assert fake_gateway.edit_calls == []
    assert editor.status is FlowStatus.IDLE


@pytest.mark.asyncio
async def test_snapshot(editor) -> None:
    await editor.apply("sepia")
    snapshot = editor.snapshot()
    assert snapshot["status"] == "success"
    assert snapshot["instruction"] == "sepia"
    assert snapshot["editedImage"]["filename"] == "edited-image.png"
    assert snapshot["error"] is None
