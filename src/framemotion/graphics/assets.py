"""Asynchronous bitmap loading for image nodes.

The first request for a source schedules a background load and returns
None; listeners registered with :meth:`AssetCache.on_load` are notified
when the bitmap is ready so the owner can repaint.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Dict, List, Optional
import base64
import io
import logging
import threading

from PIL import Image

logger = logging.getLogger(__name__)


def _read_source(src: str, base_path: Optional[Path]) -> Image.Image:
    """Decode a file path or ``data:`` URI into an RGBA image."""
    if src.startswith("data:"):
        header, _, payload = src.partition(",")
        raw = base64.b64decode(payload) if ";base64" in header else payload.encode("utf-8")
        image = Image.open(io.BytesIO(raw))
    else:
        path = Path(src)
        if base_path is not None and not path.is_absolute():
            path = base_path / path
        image = Image.open(path)
    image.load()
    return image.convert("RGBA")


class AssetCache:
    """Thread-pooled bitmap cache keyed by source string.

    Args:
        max_workers: Loader threads
        base_path: Directory relative file sources resolve against
    """

    def __init__(self, max_workers: int = 2, base_path: Optional[Path] = None) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="asset")
        self._base_path = base_path
        self._images: Dict[str, Image.Image] = {}
        self._pending: Dict[str, Future] = {}
        self._failed: set[str] = set()
        self._listeners: List[Callable[[str], None]] = []
        self._lock = threading.Lock()

    def get(self, src: str) -> Optional[Image.Image]:
        """Loaded bitmap for ``src``, or None while loading (or after failure)."""
        with self._lock:
            image = self._images.get(src)
            if image is not None or src in self._failed or src in self._pending:
                return image
            self._pending[src] = self._executor.submit(self._load, src)
        return None

    def preload(self, src: str) -> Optional[Image.Image]:
        """Load ``src`` and block until it is available."""
        self.get(src)
        future = self._pending.get(src)
        if future is not None:
            future.result()
        return self._images.get(src)

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until every pending load has finished."""
        for future in list(self._pending.values()):
            future.result(timeout=timeout)

    def on_load(self, callback: Callable[[str], None]) -> Callable[[], None]:
        """
        Register a callback fired with the source once a bitmap loads.

        Returns:
            Function to unregister the callback
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def shutdown(self) -> None:
        """Stop the loader threads."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _load(self, src: str) -> None:
        try:
            image = _read_source(src, self._base_path)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load image {src[:60]!r}: {e}")
            with self._lock:
                self._failed.add(src)
                self._pending.pop(src, None)
            return

        with self._lock:
            self._images[src] = image
        logger.debug(f"Image loaded: {src[:60]!r} {image.size}")

        for listener in list(self._listeners):
            try:
                listener(src)
            except Exception as e:
                logger.error(f"Error in asset listener: {e}")

        # Still pending until listeners ran, so wait() covers notification
        with self._lock:
            self._pending.pop(src, None)
