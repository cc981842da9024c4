"""Terminal progress indicator shown while a request is in flight."""

from __future__ import annotations

import sys
import threading
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from types import TracebackType

FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")


class Spinner:
    """Braille spinner running on a background thread.

    Does nothing unless the stream is a TTY, so captured or piped output
    never sees it. ``stop()`` signals the thread, joins it and writes the
    final line before returning.

    Example:
        ```python
        with Spinner():
            response = client.post(url, json=payload)
        ```
    """

    def __init__(
        self,
        message: str = "Processing...",
        *,
        stream: TextIO | None = None,
        interval: float = 0.1,
        enabled: bool = True,
    ) -> None:
        """Initialize the spinner.

        Args:
            message: Text shown next to the animation.
            stream: Output stream (default: stdout).
            interval: Seconds between frames.
            enabled: Set False to suppress output entirely.
        """
        self.message = message
        self.stream = stream or sys.stdout
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        isatty = getattr(self.stream, "isatty", None)
        self.active = enabled and bool(isatty and isatty())

    def _run(self) -> None:
        i = 0
        while not self._stop_event.is_set():
            self.stream.write(f"\r{FRAMES[i % len(FRAMES)]} {self.message}")
            self.stream.flush()
            i += 1
            self._stop_event.wait(self.interval)

    def start(self) -> None:
        """Start animating in the background."""
        if not self.active or self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self, *, success: bool = True) -> None:
        """Stop the animation and wait for the thread to exit.

        Args:
            success: Write the completion mark; otherwise just clear the line.
        """
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join(timeout=self.interval * 10)
        self._thread = None
        final = "✓ Complete!" if success else ""
        self.stream.write(f"\r{final:<{len(self.message) + 2}}\n")
        self.stream.flush()

    def __enter__(self) -> Spinner:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop(success=exc_type is None)
