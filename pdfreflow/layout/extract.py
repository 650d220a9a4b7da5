"""Single pass over a page's instruction list producing positioned content items.

Text runs arrive already placed in page space. Image placement is derived
from the transformation matrix in effect when the image is painted, which
is why the pass threads a `TransformTracker` through every instruction.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from pdfreflow.config import DEFAULT_SETTINGS, ConversionSettings
from pdfreflow.docs.model import (
    Concat,
    ContentItem,
    ImageItem,
    ImageResolver,
    Instruction,
    PaintImage,
    PaintText,
    RawImage,
    Restore,
    Save,
    TextItem,
)
from pdfreflow.errors import ImageError, ImageUnavailable
from pdfreflow.image.processing import to_png_bytes
from pdfreflow.layout.transform import TransformTracker

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_image(resolver: Optional[ImageResolver], name: Optional[str], timeout: float) -> RawImage:
    """Resolve an image reference, waiting at most `timeout` seconds.

    The resolver runs on a daemon thread; a resolver that outlives the
    timeout is abandoned and cannot keep the process alive.

    Doxygen:
    - @param resolver: Provider callback `resolver(name, timeout) -> RawImage | None`.
    - @param name: Image reference name as used in the content stream.
    - @param timeout: Upper bound for the wait, in seconds.
    - @return: The resolved raw image.
    - @throws ImageUnavailable: Missing resolver or name, no result, timeout or resolver failure.
    """
    if resolver is None or not name:
        raise ImageUnavailable(f"No way to resolve image {name!r}")

    outcome: Dict[str, Any] = {}

    def _run() -> None:
        try:
            outcome["raw"] = resolver(name, timeout)
        except Exception as exc:
            # provider boundary: whatever the resolver raises means "unresolved"
            outcome["error"] = exc

    worker = threading.Thread(target=_run, name=f"pdfreflow-image {name}", daemon=True)
    worker.start()
    worker.join(timeout)

    if worker.is_alive():
        raise ImageUnavailable(f"Timed out after {timeout:g}s waiting for image {name}")
    error = outcome.get("error")
    if isinstance(error, ImageError):
        raise error
    if error is not None:
        raise ImageUnavailable(f"Resolving image {name} failed: {error}") from error

    raw = outcome.get("raw")
    if raw is None:
        raise ImageUnavailable(f"Image {name} not found")
    return raw


def _keep_ok(fn: Callable[[], T]) -> Optional[T]:
    """Run one per-item step; an ImageError drops the item instead of failing the page."""
    try:
        return fn()
    except ImageError as exc:
        logger.warning("Dropping image: %s", exc)
        return None


def _image_item(instr: PaintImage, tracker: TransformTracker, resolver: Optional[ImageResolver], timeout: float) -> ImageItem:
    ctm = tracker.current
    raw = instr.inline if instr.inline is not None else resolve_image(resolver, instr.name, timeout)
    width = ctm.width
    height = ctm.height
    return ImageItem(
        data=to_png_bytes(raw),
        x=ctm.e,
        y=ctm.f + height,
        width=width,
        height=height,
    )


def extract_items(
    instructions: Optional[Iterable[Instruction]],
    resolver: Optional[ImageResolver] = None,
    settings: ConversionSettings = DEFAULT_SETTINGS,
) -> List[ContentItem]:
    """Walk the instruction list once and collect text and image items.

    Doxygen:
    - @param instructions: Ordered page instructions; None counts as empty.
    - @param resolver: Image reference resolver of the page-model provider.
    - @param settings: Conversion settings (image_timeout is used here).
    - @return: Unordered list of TextItem / ImageItem in page space.
    """
    tracker = TransformTracker()
    items: List[ContentItem] = []
    dropped = 0

    for instr in instructions or ():
        if isinstance(instr, PaintText):
            run = instr.run
            if not run.text.strip():
                continue
            items.append(TextItem(
                text=run.text,
                x=run.x,
                y=run.y,
                font_size=run.font_size,
                end_of_line=run.end_of_line,
            ))
        elif isinstance(instr, (Save, Restore, Concat)):
            tracker.apply(instr)
        elif isinstance(instr, PaintImage):
            item = _keep_ok(lambda: _image_item(instr, tracker, resolver, settings.image_timeout))
            if item is None:
                dropped += 1
            else:
                items.append(item)

    if dropped:
        logger.debug("Extracted %d items, dropped %d images", len(items), dropped)
    return items
