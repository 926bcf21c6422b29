"""Bidirectional synchronization between the structured prompt fields and the full prompt.

Field edits patch the full prompt locally. Full-prompt edits are debounced
and then sent back to the model for a fresh breakdown; the typed text is
kept verbatim when the breakdown is committed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Coroutine, Dict, Optional, Set

from models.prompt_models import FULL_PROMPT_KEY, StructuredPrompt, SyncPhase, attribute_for
from models.session_models import GENERATED_IMAGE_FILENAME, ImageResult, UploadedImage
from services.openai.gateway import AIGateway
from services.prompt_text import apply_field_edit

LOGGER = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5

ANALYSIS_ERROR = "Failed to analyze the image. Please try again."
REANALYSIS_ERROR = "Failed to re-analyze the prompt. Please try again."
GENERATION_ERROR = "Failed to generate image. Please try a different prompt."

ChangeListener = Callable[[Dict[str, Any]], Awaitable[None]]


class PromptSyncController:
    """Own the structured prompt for one uploaded image.

    ``phase`` tracks the initial analysis and ``pending_user_edit`` is set
    only by full-prompt keystrokes. The debounced re-analysis consumes the
    flag before calling the model, so committing its result cannot schedule
    another re-analysis.

    Model calls are never cancelled once issued and carry no request token:
    if two re-analyses overlap, whichever finishes last is committed.
    """

    def __init__(
        self,
        gateway: AIGateway,
        image: UploadedImage,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        on_change: Optional[ChangeListener] = None,
    ) -> None:
        self.gateway = gateway
        self.image = image
        self.debounce_seconds = debounce_seconds
        self.on_change = on_change

        self.prompt: Optional[StructuredPrompt] = None
        self.phase = SyncPhase.UNINITIALIZED
        self.pending_user_edit = False
        self.generated_image: Optional[ImageResult] = None
        self.error: Optional[str] = None

        self._reanalyses_in_flight = 0
        self._generations_in_flight = 0
        self._debounce_task: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def reanalyzing(self) -> bool:
        return self._reanalyses_in_flight > 0

    @property
    def generating(self) -> bool:
        return self._generations_in_flight > 0

    @property
    def closed(self) -> bool:
        return self._closed

    async def start(self) -> None:
        """Run the one initial analysis of the uploaded image."""
        if self.phase is not SyncPhase.UNINITIALIZED:
            raise RuntimeError("Initial analysis has already been started.")
        self.phase = SyncPhase.ANALYZING
        self.prompt = None
        self.error = None
        await self._notify()
        try:
            self.prompt = await self.gateway.analyze_image(self.image)
        except Exception:
            LOGGER.exception("Initial analysis failed for upload %s", self.image.upload_id)
            self.error = ANALYSIS_ERROR
        finally:
            self.phase = SyncPhase.READY
        await self._notify()

    async def edit_field(self, key: str, value: str) -> None:
        """Apply a user edit to any field, identified by its wire name."""
        if key == FULL_PROMPT_KEY:
            await self.edit_full_prompt(value)
            return
        attribute_for(key)
        if self._closed or self.prompt is None:
            return
        self.prompt = apply_field_edit(self.prompt, key, value)
        # The full prompt changed; an armed re-analysis should see the latest text.
        if self._debounce_armed():
            self._restart_debounce()
        await self._notify()

    async def edit_full_prompt(self, value: str) -> None:
        """Commit typed full-prompt text and (re)arm the debounced re-analysis."""
        if self._closed or self.prompt is None:
            return
        self.prompt = self.prompt.with_value(FULL_PROMPT_KEY, value)
        self.pending_user_edit = True
        if value:
            self._restart_debounce()
        else:
            self._cancel_debounce()
        await self._notify()

    async def generate_image(self) -> Optional[ImageResult]:
        """Generate an image from the current full prompt.

        Concurrent calls are not deduplicated; each one runs to completion
        and the last to finish owns the generated-image slot.
        """
        if self._closed or self.prompt is None or not self.prompt.full_prompt:
            return None
        prompt_text = self.prompt.full_prompt
        self._generations_in_flight += 1
        self.error = None
        self.generated_image = None
        await self._notify()
        try:
            data_url = await self.gateway.generate_image(prompt_text)
        except Exception:
            LOGGER.exception("Image generation failed")
            self.error = GENERATION_ERROR
        else:
            self.generated_image = ImageResult(data_url=data_url, filename=GENERATED_IMAGE_FILENAME)
        finally:
            self._generations_in_flight -= 1
        await self._notify()
        return self.generated_image

    def close(self) -> None:
        """Cancel the pending debounce and stop publishing changes."""
        self._closed = True
        self._cancel_debounce()

    async def drain(self) -> None:
        """Wait until no debounce or re-analysis task is outstanding.

        The websocket handler never awaits this; tests use it to reach a
        settled state before asserting.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def snapshot(self) -> Dict[str, Any]:
        """Return the browser-facing view of the editor state."""
        return {
            "phase": self.phase.value,
            "prompt": self.prompt.to_wire() if self.prompt is not None else None,
            "reanalyzing": self.reanalyzing,
            "generating": self.generating,
            "generatedImage": self.generated_image.to_dict() if self.generated_image else None,
            "error": self.error,
        }

    def _debounce_armed(self) -> bool:
        return self._debounce_task is not None and not self._debounce_task.done()

    def _restart_debounce(self) -> None:
        self._cancel_debounce()
        self._debounce_task = self._spawn(self._debounce_then_reanalyze())

    def _cancel_debounce(self) -> None:
        task = self._debounce_task
        self._debounce_task = None
        if task is not None and not task.done():
            task.cancel()

    async def _debounce_then_reanalyze(self) -> None:
        await asyncio.sleep(self.debounce_seconds)
        self._debounce_task = None
        if self._closed or self.phase is not SyncPhase.READY or not self.pending_user_edit:
            return
        if self.prompt is None:
            return
        self.pending_user_edit = False
        text = self.prompt.full_prompt
        if not text.strip():
            return
        # Runs as its own task so a later keystroke cannot cancel the request.
        self._spawn(self._reanalyze(text))

    async def _reanalyze(self, text: str) -> None:
        self._reanalyses_in_flight += 1
        self.error = None
        await self._notify()
        try:
            result = await self.gateway.reanalyze_text(text)
        except Exception:
            LOGGER.exception("Prompt re-analysis failed")
            self.error = REANALYSIS_ERROR
        else:
            self.prompt = result.with_value(FULL_PROMPT_KEY, text)
        finally:
            self._reanalyses_in_flight -= 1
        await self._notify()

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _notify(self) -> None:
        if self.on_change is None or self._closed:
            return
        try:
            await self.on_change(self.snapshot())
        except Exception:
            LOGGER.warning("Prompt state listener failed", exc_info=True)
