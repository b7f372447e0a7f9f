import asyncio
import logging
import threading
from typing import Any, Awaitable, Callable, Optional, Set

from errors import MalformedRecipeError, RemoteServiceError
from page_content import PageContent
from recipe_models import ExtractionResult, FailureReason, Recipe, ServiceReply
from recipe_schema import decode_recipe
from recipe_service import RecipeServiceClient

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[ExtractionResult], None]


class CompletionSlot:
    """Hands one ExtractionResult to the caller; later deliveries are dropped."""

    def __init__(self, callback: Optional[CompletionCallback] = None):
        self._callback = callback
        self._lock = threading.Lock()
        self._result: Optional[ExtractionResult] = None

    @property
    def done(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> Optional[ExtractionResult]:
        return self._result

    def deliver(self, result: ExtractionResult) -> bool:
        with self._lock:
            if self._result is not None:
                return False
            self._result = result
        if self._callback is not None:
            self._callback(result)
        return True


def decode_structured_candidate(candidate: Optional[str]) -> Optional[Recipe]:
    if candidate is None:
        return None
    try:
        return decode_recipe(candidate)
    except MalformedRecipeError as exc:
        logger.debug("Structured recipe data unusable, falling back to text: %s", exc)
        return None


class RecipeExtractor:
    """Produces a Recipe from captured page content or a photo.

    Structured metadata is tried first, then the page text is sent to the
    extraction service. Photos go straight to the service. Each request
    completes exactly once, with a TIMEOUT failure when ``deadline`` seconds
    pass first.
    """

    def __init__(self, service: RecipeServiceClient, deadline: Optional[float] = None):
        self.service = service
        self.deadline = deadline
        self._inflight: Set["asyncio.Task[ExtractionResult]"] = set()

    async def extract_from_page(
        self,
        page: PageContent,
        on_complete: Optional[CompletionCallback] = None,
        deadline: Optional[float] = None
    ) -> ExtractionResult:
        return await self._complete(self._from_page(page), on_complete, deadline)

    async def extract_from_image(
        self,
        image: bytes,
        mime_type: Optional[str] = None,
        on_complete: Optional[CompletionCallback] = None,
        deadline: Optional[float] = None
    ) -> ExtractionResult:
        return await self._complete(self._from_image(image, mime_type), on_complete, deadline)

    async def join(self) -> None:
        """Wait for remote calls still running after their request timed out."""
        if self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def _from_page(self, page: PageContent) -> ExtractionResult:
        recipe = decode_structured_candidate(page.structured_candidate)
        if recipe is not None:
            return ExtractionResult.decoded(recipe, source="structured")

        text = page.visible_text
        if text is None or not text.strip():
            return ExtractionResult.failed(FailureReason.NO_CONTENT, "No structured data or page text")
        return await self._remote("text", self.service.extract_from_text, text)

    async def _from_image(self, image: bytes, mime_type: Optional[str]) -> ExtractionResult:
        if not image:
            return ExtractionResult.failed(FailureReason.NO_CONTENT, "Empty image")
        return await self._remote("image", self.service.extract_from_image, image, mime_type)

    async def _remote(self, source: str, call: Callable[..., ServiceReply], *args: Any) -> ExtractionResult:
        try:
            reply = await asyncio.to_thread(call, *args)
        except RemoteServiceError as exc:
            logger.warning("Recipe %s extraction failed: %s", source, exc)
            return ExtractionResult.failed(FailureReason.REMOTE_UNAVAILABLE, str(exc))
        if not reply.recipe_found:
            return ExtractionResult.failed(FailureReason.RECIPE_NOT_FOUND)
        return ExtractionResult.decoded(reply.recipe, source=source)

    async def _complete(
        self,
        work: Awaitable[ExtractionResult],
        on_complete: Optional[CompletionCallback],
        deadline: Optional[float]
    ) -> ExtractionResult:
        slot = CompletionSlot(on_complete)
        task = asyncio.ensure_future(work)
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        task.add_done_callback(lambda t: self._deliver_from_task(slot, t))

        if deadline is None:
            deadline = self.deadline
        try:
            result = await asyncio.wait_for(asyncio.shield(task), deadline)
        except asyncio.TimeoutError:
            logger.warning("Recipe extraction timed out after %ss", deadline)
            result = ExtractionResult.failed(FailureReason.TIMEOUT, f"No result within {deadline}s")
        slot.deliver(result)
        return slot.result

    @staticmethod
    def _deliver_from_task(slot: CompletionSlot, task: "asyncio.Task[ExtractionResult]") -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            if slot.done:
                logger.warning("Extraction failed after completion: %r", exc)
            return
        if not slot.deliver(task.result()):
            logger.info("Discarding late extraction result")
