"""Unit tests for the polling watch loop."""

from __future__ import annotations

import os
import threading
from pathlib import Path

import pytest

from litconvert.errors import ConversionError
from litconvert.watcher import WatchState, watch


class _Clock:
    """Feed per-cycle modification times and stop after the last cycle."""

    def __init__(self, cycles: list[dict[str, float]], stop: threading.Event) -> None:
        self.cycles = cycles
        self.index = 0
        self.stop = stop
        self.sleeps: list[float] = []

    def mtime(self, path: Path) -> float:
        return self.cycles[self.index][path.name]

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if self.index + 1 >= len(self.cycles):
            self.stop.set()
            return
        self.index += 1


def test_watch_state_refreshes_baseline_for_every_file() -> None:
    """Report only advanced files and refresh every baseline."""
    times = {"a.Rnw": 1.0, "b.Rnw": 1.0}
    state = WatchState(["a.Rnw", "b.Rnw"], mtime=lambda p: times[p.name])

    times.update({"a.Rnw": 2.0, "b.Rnw": 0.5})
    assert state.poll() == [Path("a.Rnw")]
    assert state.baseline == {Path("a.Rnw"): 2.0, Path("b.Rnw"): 0.5}

    times["b.Rnw"] = 1.0
    assert state.poll() == [Path("b.Rnw")]


def test_initial_compile_then_only_changed_file() -> None:
    """Compile both files once, then only the one whose timestamp advanced."""
    stop = threading.Event()
    clock = _Clock(
        [
            {"a.Rnw": 1.0, "b.Rnw": 1.0},
            {"a.Rnw": 2.0, "b.Rnw": 1.0},
        ],
        stop,
    )
    compiled: list[tuple[Path, dict[str, object]]] = []

    cycles = watch(
        ["a.Rnw", "b.Rnw"],
        lambda path, **kw: compiled.append((path, kw)),
        interval=0.5,
        stop=stop,
        sleep=clock.sleep,
        mtime=clock.mtime,
        compiler="xelatex",
    )

    assert [path for path, _ in compiled] == [Path("a.Rnw"), Path("b.Rnw"), Path("a.Rnw")]
    assert all(kw == {"compiler": "xelatex"} for _, kw in compiled)
    assert clock.sleeps == [0.5, 0.5]
    assert cycles == 2


def test_recompiles_in_input_order_each_cycle() -> None:
    """Recompile every changed file sequentially in the supplied order."""
    stop = threading.Event()
    clock = _Clock(
        [
            {"a": 1.0, "b": 1.0, "c": 1.0},
            {"a": 1.0, "b": 1.0, "c": 1.0},
            {"a": 3.0, "b": 1.0, "c": 2.0},
            {"a": 3.0, "b": 5.0, "c": 2.0},
        ],
        stop,
    )
    compiled: list[str] = []

    watch(
        ["c", "a", "b"],
        lambda path: compiled.append(path.name),
        stop=stop,
        sleep=clock.sleep,
        mtime=clock.mtime,
    )

    assert compiled == ["c", "a", "b", "c", "a", "b"]


def test_compile_failure_ends_the_loop_by_default() -> None:
    """Propagate compile errors out of the loop."""
    stop = threading.Event()
    clock = _Clock([{"a": 1.0}, {"a": 2.0}, {"a": 3.0}], stop)
    calls: list[Path] = []

    def compile_fn(path: Path) -> None:
        calls.append(path)
        if len(calls) == 2:
            raise RuntimeError("latex error")

    with pytest.raises(RuntimeError, match="latex error"):
        watch("a", compile_fn, stop=stop, sleep=clock.sleep, mtime=clock.mtime)

    assert len(calls) == 2


def test_continue_on_error_keeps_watching(caplog: pytest.LogCaptureFixture) -> None:
    """Log failures and keep polling when continue_on_error is set."""
    stop = threading.Event()
    clock = _Clock([{"a": 1.0}, {"a": 2.0}, {"a": 3.0}], stop)
    calls: list[Path] = []

    def compile_fn(path: Path) -> None:
        calls.append(path)
        raise RuntimeError("latex error")

    cycles = watch(
        "a",
        compile_fn,
        stop=stop,
        continue_on_error=True,
        sleep=clock.sleep,
        mtime=clock.mtime,
    )

    assert len(calls) == 3
    assert cycles == 3
    assert "still watching" in caplog.text


def test_stop_set_before_start_only_runs_initial_pass() -> None:
    """Run the warm-up compile and return without polling when already stopped."""
    stop = threading.Event()
    stop.set()
    compiled: list[Path] = []

    cycles = watch(
        ["a"],
        compiled.append,
        stop=stop,
        sleep=lambda _s: pytest.fail("should not sleep"),
        mtime=lambda _p: 1.0,
    )

    assert compiled == [Path("a")]
    assert cycles == 0


def test_watch_rejects_empty_inputs() -> None:
    """Require at least one watched file."""
    with pytest.raises(ConversionError, match="Invalid watch parameters"):
        watch([], lambda path: None, stop=threading.Event())


def test_watch_uses_real_file_mtimes(tmp_path: Path) -> None:
    """Detect a real modification through os.path.getmtime."""
    target = tmp_path / "doc.Rnw"
    target.write_text("v1")
    stop = threading.Event()
    compiled: list[Path] = []

    def sleep(_seconds: float) -> None:
        if compiled and len(compiled) >= 2:
            stop.set()
            return
        stat = target.stat()
        os.utime(target, (stat.st_atime, stat.st_mtime + 10))

    watch(target, compiled.append, stop=stop, sleep=sleep)

    assert compiled == [target, target]
