from __future__ import annotations

import re
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

import structlog

from fieldrep_core.core.domain.events.exceptions import RemoteError

logger = structlog.get_logger(__name__)

ImageLoader = Callable[[str], Awaitable[Any]]

_QUALITY_PARAM = re.compile(r"([?&])(quality|q)=\d+")
_IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp", "bmp"}


def high_quality_url(url: str, max_quality: int = 100) -> str:
    """Rewrites `quality=` / `q=` query parameters to `max_quality`."""
    return _QUALITY_PARAM.sub(lambda m: f"{m.group(1)}{m.group(2)}={max_quality}", url)


def media_type(url: str | None) -> str | None:
    """'image', 'pdf' or None when the reference gives no hint."""
    if not url:
        return None
    if url.startswith("data:"):
        if "image/" in url:
            return "image"
        if "application/pdf" in url:
            return "pdf"
        return None
    extension = urlsplit(url).path.rsplit(".", 1)[-1].lower()
    if extension in _IMAGE_EXTENSIONS:
        return "image"
    if extension == "pdf":
        return "pdf"
    lowered = url.lower()
    if "image" in lowered or "photo" in lowered:
        return "image"
    if "pdf" in lowered:
        return "pdf"
    return None


class GalleryPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    SETTLING = "settling"


class VisualAidGallery:
    """
    Swipeable full-screen viewer over a doctor's visual aids.

    IDLE --drag_start--> DRAGGING --drag_move--> DRAGGING
    DRAGGING --drag_release / drag_cancel--> SETTLING --settle_complete--> IDLE

    A release pages when |dx| > swipe_threshold * viewport_width: dragging
    right (dx > 0) goes back one image, dragging left goes forward one.
    Paging past either end leaves the index alone. The settle animation is
    driven from outside: `on_settle` is told to start it and the renderer
    calls `settle_complete()` when it ends.
    """

    def __init__(
        self,
        visual_aids: Sequence[str],
        viewport_width: float,
        *,
        initial_index: int = 0,
        image_loader: ImageLoader | None = None,
        swipe_threshold: float = 0.2,
        max_quality: int = 100,
        on_settle: Callable[[float], None] | None = None,
    ) -> None:
        if viewport_width <= 0:
            raise ValueError("viewport_width must be positive")
        self.visual_aids = list(visual_aids)
        self.viewport_width = float(viewport_width)
        self.swipe_threshold = swipe_threshold
        self.max_quality = max_quality
        self.image_loader = image_loader
        self.on_settle = on_settle

        self.phase = GalleryPhase.IDLE
        self.offset = 0.0
        self.target_offset = 0.0
        self.index = self._clamp(initial_index)

        # loading sub-state of the current index
        self.loading = self.enabled
        self.load_failed = False
        self.displayed_url: str | None = None
        self._load_token = 0

    # ------------------------------------------------ derived
    @property
    def enabled(self) -> bool:
        return bool(self.visual_aids)

    @property
    def can_go_previous(self) -> bool:
        return self.enabled and self.index > 0

    @property
    def can_go_next(self) -> bool:
        return self.enabled and self.index < len(self.visual_aids) - 1

    @property
    def current_url(self) -> str | None:
        if not self.enabled:
            return None
        return high_quality_url(self.visual_aids[self.index], self.max_quality)

    @property
    def current_media_type(self) -> str | None:
        return media_type(self.current_url)

    @property
    def position_label(self) -> str:
        return f"{self.index + 1} / {len(self.visual_aids)}" if self.enabled else ""

    # ------------------------------------------------ gestures
    def drag_start(self) -> None:
        if not self.enabled or self.phase is GalleryPhase.DRAGGING:
            return
        # a new touch cuts a running settle short
        self.phase = GalleryPhase.DRAGGING
        self.offset = 0.0
        self.target_offset = 0.0

    def drag_move(self, dx: float) -> None:
        if self.phase is not GalleryPhase.DRAGGING:
            return
        self.offset = float(dx)

    def drag_release(self, dx: float | None = None) -> int:
        if self.phase is not GalleryPhase.DRAGGING:
            return self.index
        dx = self.offset if dx is None else float(dx)
        self.offset = dx
        if abs(dx) > self.swipe_threshold * self.viewport_width:
            self._go_to(self.index - 1 if dx > 0 else self.index + 1)
        self._settle()
        return self.index

    def drag_cancel(self) -> None:
        if self.phase is GalleryPhase.DRAGGING:
            self._settle()

    def settle_complete(self) -> None:
        if self.phase is not GalleryPhase.SETTLING:
            return
        self.phase = GalleryPhase.IDLE
        self.offset = 0.0

    def _settle(self) -> None:
        self.phase = GalleryPhase.SETTLING
        self.target_offset = 0.0
        if self.on_settle is not None:
            self.on_settle(self.offset)

    # ------------------------------------------------ buttons
    def previous(self) -> bool:
        if not self.can_go_previous or self.phase is GalleryPhase.DRAGGING:
            return False
        return self._go_to(self.index - 1)

    def next(self) -> bool:
        if not self.can_go_next or self.phase is GalleryPhase.DRAGGING:
            return False
        return self._go_to(self.index + 1)

    def resize(self, viewport_width: float) -> None:
        if viewport_width <= 0:
            raise ValueError("viewport_width must be positive")
        self.viewport_width = float(viewport_width)

    def set_visual_aids(self, visual_aids: Sequence[str]) -> None:
        self.visual_aids = list(visual_aids)
        self.index = self._clamp(self.index)
        self.loading = self.enabled
        self.load_failed = False
        self._load_token += 1

    def _clamp(self, index: int) -> int:
        if not self.visual_aids:
            return 0
        return max(0, min(index, len(self.visual_aids) - 1))

    def _go_to(self, index: int) -> bool:
        index = self._clamp(index)
        if index == self.index:
            return False
        self.index = index
        self.loading = True
        self.load_failed = False
        self._load_token += 1  # any outstanding load belongs to the old index
        logger.debug("gallery.index_changed", index=index, total=len(self.visual_aids))
        return True

    # ------------------------------------------------ image delivery
    async def load_current(self) -> bool:
        """
        Fetches the current image. The previously displayed one stays up
        until this finishes; a failure clears the loading flag only.
        Results for an index the user already paged away from are ignored.
        """
        if not self.enabled:
            return False
        self._load_token += 1
        token = self._load_token
        url = self.current_url
        self.loading = True
        self.load_failed = False
        try:
            if self.image_loader is not None:
                await self.image_loader(url)
        except RemoteError as exc:
            if token != self._load_token:
                return False
            self.loading = False
            self.load_failed = True
            logger.warning("gallery.load_failed", index=self.index, url=url, error=str(exc))
            return False
        if token != self._load_token:
            return False
        self.loading = False
        self.displayed_url = url
        return True

    async def retry_load(self) -> bool:
        return await self.load_current()
