import sys
from typing import TextIO

from macroapi.application.port import ProgressReporter


class CommandLineProgress(ProgressReporter):
    """Draws a single-line progress bar, rewriting it in place until the run is done."""

    def __init__(self, stream: TextIO | None = None, width: int = 40):
        self.stream = stream
        self.width = width

    def __call__(self, fraction: float, done: bool) -> None:
        stream = self.stream if self.stream is not None else sys.stderr
        fraction = min(max(fraction, 0.0), 1.0)
        filled = int(round(fraction * self.width))
        bar = "#" * filled + "-" * (self.width - filled)
        stream.write(f"\r[{bar}] {fraction * 100:5.1f}%")
        if done:
            stream.write("\n")
        stream.flush()
