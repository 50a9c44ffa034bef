"""
Live controller: debounced regeneration of the displayed symbol as text changes.

Each keystroke bumps a sequence number. An encode attempt only publishes its
result if its sequence number is still the latest when it completes, so a
slow encode for superseded input can never overwrite newer state.
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional, Set, Union

from qrlive.capacity import ErrorCorrectionLevel
from qrlive.config import DEFAULT_SETTINGS, Settings
from qrlive.errors import ClipboardUnavailable, DownloadFailed, EncodeError, NotReady
from qrlive.export import ExportFormat, ExportResult, export_async
from qrlive.render import to_svg
from qrlive.symbol import QrSymbol, encode

logger = logging.getLogger(__name__)


class State(Enum):
    EMPTY = 'empty'
    PENDING = 'pending'
    GENERATING = 'generating'
    READY = 'ready'
    FAILED = 'failed'


class LiveController:
    """
    Owns the input -> symbol state machine.

    Must be driven from inside a running asyncio event loop.

    Args:
        level: Error correction level used for every encode
        settings: Debounce delay and rendering/export options
        encoder: ``encode(text, level)`` callable, run in a worker thread
        on_change: Called with the controller after every state transition
        notify: Called with a user-facing message for copy/download outcomes
    """

    def __init__(self, level: Union[str, ErrorCorrectionLevel] = None,
                 settings: Settings = None,
                 encoder: Callable[..., QrSymbol] = encode,
                 on_change: Callable[['LiveController'], None] = None,
                 notify: Callable[[str], None] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self.level = ErrorCorrectionLevel.parse(level or self.settings.level)
        self._encoder = encoder
        self._on_change = on_change
        self._notify = notify

        self.state = State.EMPTY
        self.text = ''
        self.symbol: Optional[QrSymbol] = None
        self.error: Optional[str] = None

        self._sequence = 0
        self._debounce: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def sequence(self) -> int:
        return self._sequence

    @property
    def can_export(self) -> bool:
        return self.state is State.READY

    def _transition(self, state: State, symbol: QrSymbol = None, error: str = None):
        logger.debug("State %s -> %s (seq %d)", self.state.name, state.name, self._sequence)
        self.state = state
        self.symbol = symbol
        self.error = error
        if self._on_change is not None:
            self._on_change(self)

    def on_input(self, text: str) -> None:
        """Handle a change of the input text."""
        self._sequence += 1
        self.text = text
        if self._debounce is not None:
            self._debounce.cancel()
            self._debounce = None

        if not text.strip():
            self._transition(State.EMPTY)
            return

        self._transition(State.PENDING)
        task = asyncio.get_running_loop().create_task(self._run(self._sequence, text))
        self._debounce = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, sequence: int, text: str) -> None:
        await asyncio.sleep(self.settings.debounce_ms / 1000)
        if sequence != self._sequence:
            return

        # Past this point the attempt is no longer cancelled, only discarded
        self._debounce = None
        self._transition(State.GENERATING)
        try:
            symbol = await asyncio.to_thread(self._encoder, text, self.level)
        except EncodeError as exc:
            if sequence != self._sequence:
                logger.debug("Discarding stale failure for seq %d", sequence)
                return
            logger.info("Encoding failed: %s", exc)
            self._transition(State.FAILED, error=str(exc))
            return
        except Exception as exc:
            logger.exception("Unexpected error while encoding seq %d", sequence)
            if sequence == self._sequence:
                self._transition(State.FAILED, error=f"Error generating QR code: {exc}")
            raise

        if sequence != self._sequence:
            logger.debug("Discarding stale result for seq %d (latest %d)",
                         sequence, self._sequence)
            return
        self._transition(State.READY, symbol=symbol)

    async def wait_idle(self) -> None:
        """Wait until no debounce or encode attempt is outstanding."""
        while self._tasks:
            results = await asyncio.gather(*list(self._tasks), return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    raise result

    def _require_ready(self) -> QrSymbol:
        if self.state is not State.READY:
            raise NotReady(f"No QR code to export (state: {self.state.value})")
        return self.symbol

    def svg(self) -> str:
        """Markup of the displayed symbol, as copied to the clipboard."""
        symbol = self._require_ready()
        return to_svg(symbol, self.settings.border, self.settings.dark, self.settings.light)

    def copy_svg(self, sink: Callable[[str], None]) -> bool:
        """Hand the SVG markup to a clipboard sink. Returns True on success."""
        markup = self.svg()
        try:
            sink(markup)
        except ClipboardUnavailable as exc:
            logger.info("Clipboard write failed: %s", exc)
            self._message(f"Failed to copy: {exc}")
            return False
        self._message("SVG copied to clipboard!")
        return True

    async def download(self, fmt: Union[str, ExportFormat],
                       sink: Callable[[ExportResult], None]) -> Optional[ExportResult]:
        """Export the displayed symbol and hand the file to a download sink."""
        fmt = ExportFormat.parse(fmt)
        symbol = self._require_ready()
        result = await export_async(symbol, fmt, self.settings)
        try:
            sink(result)
        except DownloadFailed as exc:
            logger.info("Download of %s failed: %s", result.filename, exc)
            self._message(f"Failed to save {result.filename}: {exc}")
            return None
        self._message(f"Saved {result.filename}")
        return result

    def _message(self, text: str) -> None:
        if self._notify is not None:
            self._notify(text)
