from __future__ import annotations

import importlib
import sys
from typing import Any


class SearchProgressReporter:
    def on_step(self, steps: int, history_size: int) -> None:
        raise NotImplementedError

    def on_epoch(self, epochs: int) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class NoopSearchProgressReporter(SearchProgressReporter):
    def on_step(self, steps: int, history_size: int) -> None:  # noqa: ARG002
        return

    def on_epoch(self, epochs: int) -> None:  # noqa: ARG002
        return

    def close(self) -> None:
        return


class TqdmSearchProgressReporter(SearchProgressReporter):
    def __init__(
        self,
        *,
        total_steps: int | None,
        refresh_s: float,
        tqdm_cls: Any,
    ) -> None:
        self._epochs = 0
        self._bar = tqdm_cls(
            total=total_steps,
            desc="Restoring",
            unit="move",
            dynamic_ncols=True,
            mininterval=float(refresh_s),
            file=sys.stderr,
            leave=True,
        )

    def on_step(self, steps: int, history_size: int) -> None:
        self._bar.set_postfix(
            {"epochs": str(self._epochs), "history": str(history_size)},
            refresh=False,
        )
        self._bar.update(1)

    def on_epoch(self, epochs: int) -> None:
        self._epochs = epochs

    def close(self) -> None:
        self._bar.close()


def build_search_progress_reporter(
    *,
    enabled: bool,
    total_steps: int | None = None,
    refresh_s: float = 0.5,
    explicit_request: bool = False,
) -> SearchProgressReporter:
    if not enabled:
        return NoopSearchProgressReporter()

    try:
        tqdm_module = importlib.import_module("tqdm")
    except ImportError:
        if explicit_request:
            print(
                "Progress requested but missing dependency: tqdm. Install with "
                "pip install 'hanoi-towers[progress]' or uv sync --group progress.",
                file=sys.stderr,
                flush=True,
            )
        return NoopSearchProgressReporter()

    tqdm_cls = getattr(tqdm_module, "tqdm", None)
    if tqdm_cls is None:
        if explicit_request:
            print(
                "Progress requested but tqdm could not be loaded. Install with "
                "pip install 'hanoi-towers[progress]' or uv sync --group progress.",
                file=sys.stderr,
                flush=True,
            )
        return NoopSearchProgressReporter()
    return TqdmSearchProgressReporter(
        total_steps=total_steps,
        refresh_s=refresh_s,
        tqdm_cls=tqdm_cls,
    )
