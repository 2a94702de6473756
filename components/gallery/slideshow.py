"""
Image slideshow state.

A fixed set of slides is cycled forwards or backwards; exactly one slide is
active after every transition. Auto-advance is throttled against a fixed
interval, so the page can call ``tick`` on every rerun.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Any
import logging
import time

logger = logging.getLogger(__name__)


@dataclass
class Slide:
    image: str
    caption: str = ""
    active: bool = False


class SlideShow:
    """Cycles a fixed set of slides."""

    def __init__(self, slides: Sequence[Slide], interval_seconds: float = 5.0):
        self.slides: List[Slide] = list(slides)
        self.interval_seconds = interval_seconds
        self.current_index = 0
        self.last_advance: Optional[float] = None
        if self.slides:
            self.show(0)

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> 'SlideShow':
        """Build a slideshow from the ``slideshow`` config section."""
        slides = [Slide(image=s['image'], caption=s.get('caption', '')) for s in settings.get('slides', [])]
        return cls(slides, interval_seconds=float(settings.get('interval_seconds', 5)))

    @property
    def count(self) -> int:
        return len(self.slides)

    @property
    def active_slide(self) -> Optional[Slide]:
        if not self.slides:
            return None
        return self.slides[self.current_index]

    def show(self, index: int) -> None:
        """Mark the slide at ``index`` active and every other slide inactive."""
        if not self.slides:
            return
        if not 0 <= index < self.count:
            raise IndexError(f"Slide index {index} out of range for {self.count} slides")
        for i, slide in enumerate(self.slides):
            slide.active = i == index
        self.current_index = index

    def next(self) -> int:
        if self.slides:
            self.show((self.current_index + 1) % self.count)
        return self.current_index

    def previous(self) -> int:
        if self.slides:
            self.show((self.current_index - 1 + self.count) % self.count)
        return self.current_index

    def tick(self, now: Optional[float] = None) -> bool:
        """
        Advance to the next slide if the interval has elapsed.

        The first tick only starts the clock.

        Args:
            now: Current time in seconds (defaults to time.time())

        Returns:
            True if the slideshow advanced
        """
        current_time = time.time() if now is None else now

        if self.last_advance is None:
            self.last_advance = current_time
            return False

        if current_time - self.last_advance >= self.interval_seconds:
            self.last_advance = current_time
            self.next()
            logger.debug(f"Slideshow advanced to slide {self.current_index}")
            return True

        return False
