from __future__ import annotations

import base64
import colorsys
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence

from .display import StateSink
from .state import PEG_ORDER, GameState

_MISSING_PILLOW = (
    "Missing pillow. Install with: pip install 'hanoi-towers[viz]' "
    "or uv sync --group viz"
)


@dataclass(frozen=True, slots=True)
class StateImage:
    mime_type: str
    data_base64: str
    data_url: str
    width: int
    height: int


def _draw_pegs(
    *,
    pegs: Sequence[Sequence[int]],
    labels: Sequence[str] | None,
    n_disks: int,
    size: tuple[int, int],
    background: str,
    caption: str | None = None,
) -> Any:
    try:
        from PIL import Image, ImageDraw, ImageFont
    except ImportError as exc:  # pragma: no cover
        raise RuntimeError(_MISSING_PILLOW) from exc

    width, height = size
    img = Image.new("RGB", (width, height), background)
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()

    peg_count = max(len(pegs), 1)
    margin_x = max(50, width // 8)
    peg_y_top = int(height * 0.2)
    peg_y_bottom = int(height * 0.82)
    span = max(1, peg_count - 1)
    peg_x_positions = [
        int(margin_x + i * (width - 2 * margin_x) / span) for i in range(peg_count)
    ]

    if caption:
        draw.text((10, 4), caption, fill="black", font=font)

    if labels:
        for x, label in zip(peg_x_positions, labels):
            bbox = draw.textbbox((0, 0), label, font=font)
            label_w = bbox[2] - bbox[0]
            draw.text(
                (x - label_w / 2, int(height * 0.06)),
                label,
                fill="black",
                font=font,
            )

    disk_h = max(10, int(height * 0.05))
    min_w = max(30, int(width * 0.08))
    max_w = max(120, int(width * 0.28))
    base_height = max(10, int(height * 0.03))
    base_top = min(height - base_height - 6, peg_y_bottom + 6)
    base_bottom = base_top + base_height
    draw.rectangle(
        [margin_x - 30, base_top, width - margin_x + 30, base_bottom], fill="#1f2937"
    )

    for i, peg in enumerate(pegs):
        x = peg_x_positions[i]
        draw.line((x, peg_y_top, x, peg_y_bottom), fill="#6b7280", width=4)
        # stacks are top-first; draw from the bottom disk up
        for j, disk in enumerate(reversed(list(peg))):
            ratio = (disk - 1) / (n_disks - 1) if n_disks > 1 else 1
            w = min_w + ratio * (max_w - min_w)
            x0 = x - w / 2
            x1 = x + w / 2
            y1 = peg_y_bottom - j * (disk_h + 4)
            y0 = y1 - disk_h
            hue = 0.6 - 0.55 * ratio
            r, g, b = colorsys.hls_to_rgb(hue, 0.55, 0.65)
            color = (int(r * 255), int(g * 255), int(b * 255))
            draw.rectangle([x0, y0, x1, y1], fill=color, outline="#111827")
    return img


def _pegs_and_count(
    state: GameState | Mapping[str, Any],
) -> tuple[list[list[int]], int]:
    if isinstance(state, GameState):
        return [list(state.peg(peg_id)) for peg_id in PEG_ORDER], state.n_disks
    pegs = state.get("pegs")
    n_disks = state.get("n_disks")
    if not isinstance(pegs, Mapping):
        raise ValueError("state.pegs is required to render image")
    if not isinstance(n_disks, int):
        raise ValueError("state.n_disks is required to render image")
    return [list(pegs.get(peg_id.value, [])) for peg_id in PEG_ORDER], n_disks


def draw_state(
    state: GameState | Mapping[str, Any],
    *,
    size: tuple[int, int] = (640, 360),
    label_pegs: bool = True,
    background: str = "white",
    caption: str | None = None,
) -> Any:
    """Return a Pillow image of `state` (a GameState or its `to_dict()` form)."""

    pegs, n_disks = _pegs_and_count(state)
    return _draw_pegs(
        pegs=pegs,
        labels=[peg_id.value for peg_id in PEG_ORDER] if label_pegs else None,
        n_disks=n_disks,
        size=size,
        background=background,
        caption=caption,
    )


def render_state_image(
    state: GameState | Mapping[str, Any],
    *,
    size: tuple[int, int] = (640, 360),
    label_pegs: bool = True,
    background: str = "white",
) -> StateImage:
    img = draw_state(state, size=size, label_pegs=label_pegs, background=background)
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    b64 = base64.b64encode(buffer.getvalue()).decode("ascii")
    width, height = size
    return StateImage(
        mime_type="image/png",
        data_base64=b64,
        data_url=f"data:image/png;base64,{b64}",
        width=width,
        height=height,
    )


class ImageSink(StateSink):
    """Writes one PNG frame per displayed state into `out_dir`."""

    def __init__(
        self,
        out_dir: str | Path,
        *,
        size: tuple[int, int] = (640, 360),
        label_pegs: bool = True,
    ) -> None:
        self.out_dir = Path(out_dir)
        self.size = size
        self.label_pegs = label_pegs
        self.frames: list[Path] = []
        self._caption: str | None = None

    def show(self, state: GameState) -> None:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        caption = f"Move {len(self.frames) + 1}"
        if self._caption:
            caption = f"{caption} ({self._caption})"
        img = draw_state(
            state, size=self.size, label_pegs=self.label_pegs, caption=caption
        )
        frame_path = self.out_dir / f"frame_{len(self.frames):04d}.png"
        img.save(frame_path)
        self.frames.append(frame_path)

    def note(self, text: str) -> None:
        self._caption = text
