"""Polling watch loop that recompiles inputs when they are modified."""

from __future__ import annotations

import logging
import os
import threading
import time
from collections.abc import Callable, Iterable
from pathlib import Path

from pydantic import ValidationError

from litconvert.errors import ConversionError
from litconvert.schemas import WatchConfig

logger = logging.getLogger(__name__)

type CompileCallback = Callable[..., object]
type MtimeReader = Callable[[Path], float]


class WatchState:
    """Modification-time baseline for an ordered set of watched paths."""

    def __init__(
        self,
        paths: Iterable[Path | str],
        mtime: MtimeReader = os.path.getmtime,
    ) -> None:
        self.paths = tuple(Path(path) for path in paths)
        self._mtime = mtime
        self.baseline = self.snapshot()

    def snapshot(self) -> dict[Path, float]:
        """Read the current modification time of every watched path."""
        return {path: self._mtime(path) for path in self.paths}

    def poll(self) -> list[Path]:
        """Return paths modified since the last poll, in watch order.

        The baseline is replaced by the fresh snapshot for every path,
        whether it changed or not.
        """
        current = self.snapshot()
        changed = [path for path in self.paths if current[path] > self.baseline[path]]
        self.baseline = current
        return changed


def watch(
    inputs: Path | str | Iterable[Path | str],
    compile_fn: CompileCallback,
    interval: float = 1.0,
    *,
    stop: threading.Event | None = None,
    continue_on_error: bool = False,
    sleep: Callable[[float], None] = time.sleep,
    mtime: MtimeReader = os.path.getmtime,
    **options: object,
) -> int:
    """Compile inputs once, then recompile each one whenever it changes.

    Parameters
    ----------
    inputs : Path | str | Iterable[Path | str]
        File or files to watch.
    compile_fn : Callable
        Called as ``compile_fn(path, **options)``; e.g. ``render_pdf``.
    interval : float, default=1.0
        Seconds to sleep between polls.
    stop : threading.Event | None, default=None
        Checked before every poll; the loop runs until interrupted when
        ``None``.
    continue_on_error : bool, default=False
        Log compile failures and keep watching instead of propagating them.
    sleep, mtime
        Injection points for the clock and the filesystem.
    **options
        Passed to ``compile_fn``.

    Returns
    -------
    int
        Number of completed poll cycles once ``stop`` is set.
    """
    paths = [inputs] if isinstance(inputs, (str, Path)) else list(inputs)
    try:
        config = WatchConfig(
            inputs=tuple(Path(path) for path in paths),
            interval=interval,
            continue_on_error=continue_on_error,
        )
    except ValidationError as exc:
        raise ConversionError(f"Invalid watch parameters: {exc}") from exc

    def run(path: Path) -> None:
        try:
            compile_fn(path, **options)
        except Exception:
            if not config.continue_on_error:
                raise
            logger.exception("compiling %s failed; still watching", path)

    state = WatchState(config.inputs, mtime=mtime)
    for path in state.paths:
        run(path)
    logger.info("watching %d file(s) every %ss", len(state.paths), config.interval)

    cycles = 0
    while stop is None or not stop.is_set():
        for path in state.poll():
            logger.info("%s changed; recompiling", path)
            run(path)
        cycles += 1
        sleep(config.interval)
    return cycles
