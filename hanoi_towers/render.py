from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from .display import SEPARATOR
from .errors import InvalidStateError
from .state import PEG_ORDER, GameState


def load_recording(path: Path) -> dict[str, Any]:
    """Read a recording and check that every state it holds is a valid position.

    Raises `InvalidStateError` naming the first bad step.
    """

    recording = json.loads(path.read_text())
    if not isinstance(recording, dict):
        raise InvalidStateError("recording must be a JSON object")
    if not isinstance(recording.get("steps", []), list):
        raise InvalidStateError("recording.steps must be a list")
    if not isinstance(recording.get("metadata", {}), dict):
        raise InvalidStateError("recording.metadata must be an object")
    for step in _normalized_steps(recording):
        state = step.get("state") if isinstance(step, dict) else None
        if not isinstance(state, dict):
            raise InvalidStateError(f"step {step!r} has no state")
        try:
            GameState.from_dict(state)
        except (TypeError, ValueError) as exc:
            raise InvalidStateError(f"step {step.get('index')}: {exc}") from exc
    return recording


def _json_for_html_script(value: Any) -> str:
    return json.dumps(value).replace("</", "<\\/")


def _normalized_steps(recording: dict[str, Any]) -> list[dict[str, Any]]:
    steps = list(recording.get("steps", []))
    initial_state = recording.get("metadata", {}).get("initial_state")
    if initial_state is None:
        return steps
    init_step = {"index": 0, "phase": "start", "state": initial_state}
    return [init_step, *steps]


def render_ascii(recording: dict[str, Any]) -> str:
    lines = []
    for step in _normalized_steps(recording):
        state = step.get("state") or {}
        pegs = state.get("pegs")
        lines.append(f"Step {step.get('index')} ({step.get('phase', '?')})")
        if pegs is None:
            lines.append("Pegs: <missing>")
        else:
            for peg_id in PEG_ORDER:
                disks = pegs.get(peg_id.value, [])
                lines.append(f"{peg_id.value}: [{','.join(str(d) for d in disks)}]")
        lines.append(SEPARATOR)
    return "\n".join(lines)


def render_html(recording: dict[str, Any]) -> str:
    data = _json_for_html_script(
        {**recording, "steps": _normalized_steps(recording)}
    )
    template = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  <title>Hanoi Playback</title>
  <style>
    body { font-family: sans-serif; margin: 20px; }
    .controls button { margin-right: 8px; }
    .pegs { display: flex; gap: 24px; margin-top: 16px; }
    .peg { flex: 1; border: 1px solid #ccc; padding: 8px; min-height: 220px; }
    .disk { height: 16px; margin: 4px auto; border-radius: 4px; background: #4a90e2; }
    .restore .disk { background: #e2944a; }
    .stats { margin-top: 8px; }
    .meta { color: #666; font-size: 12px; }
  </style>
</head>
<body>
  <h2>Hanoi Playback</h2>
  <div class="meta" id="meta"></div>
  <div class="controls">
    <button onclick="prevStep()">Prev</button>
    <button onclick="togglePlay()" id="playBtn">Play</button>
    <button onclick="nextStep()">Next</button>
    <input type="range" id="slider" min="0" value="0" step="1" />
  </div>
  <div class="stats" id="stats"></div>
  <div class="pegs" id="pegs"></div>

  <script>
    const recording = __RECORDING_DATA__;
    const steps = recording.steps || [];
    const pegOrder = ["tower1", "tower2", "tower3"];
    const slider = document.getElementById('slider');
    const stats = document.getElementById('stats');
    const pegsEl = document.getElementById('pegs');
    const meta = document.getElementById('meta');
    const playBtn = document.getElementById('playBtn');
    let idx = 0;
    let interval = null;

    slider.max = Math.max(steps.length - 1, 0);

    function render() {
      if (!steps.length) return;
      const step = steps[idx];
      const state = step.state || {};
      const pegs = state.pegs || {};
      const nDisks = state.n_disks || 1;

      meta.textContent = JSON.stringify(recording.metadata || {});
      stats.textContent = `Step ${step.index} | phase=${step.phase}`;
      pegsEl.innerHTML = '';
      pegsEl.className = `pegs ${step.phase}`;
      pegOrder.forEach((name) => {
        const pegDiv = document.createElement('div');
        pegDiv.className = 'peg';
        const title = document.createElement('div');
        title.textContent = name;
        pegDiv.appendChild(title);
        (pegs[name] || []).forEach(disk => {
          const diskDiv = document.createElement('div');
          const ratio = nDisks > 1 ? (disk - 1) / (nDisks - 1) : 1;
          diskDiv.className = 'disk';
          diskDiv.style.width = `${40 + ratio * 120}px`;
          pegDiv.appendChild(diskDiv);
        });
        pegsEl.appendChild(pegDiv);
      });
      slider.value = idx;
    }

    function nextStep() {
      idx = Math.min(idx + 1, steps.length - 1);
      render();
    }
    function prevStep() {
      idx = Math.max(idx - 1, 0);
      render();
    }
    function togglePlay() {
      if (interval) {
        clearInterval(interval);
        interval = null;
        playBtn.textContent = 'Play';
      } else {
        interval = setInterval(() => {
          if (idx >= steps.length - 1) {
            togglePlay();
            return;
          }
          nextStep();
        }, 600);
        playBtn.textContent = 'Pause';
      }
    }
    slider.addEventListener('input', (e) => {
      idx = parseInt(e.target.value, 10);
      render();
    });
    render();
  </script>
</body>
</html>"""
    return template.replace("__RECORDING_DATA__", data)


def render_frames(recording: dict[str, Any], out_dir: Path) -> list[Path]:
    from .vision import draw_state

    frames_dir = out_dir / "frames"
    frames_dir.mkdir(parents=True, exist_ok=True)
    frames: list[Path] = []
    for idx, step in enumerate(_normalized_steps(recording)):
        img = draw_state(
            step.get("state") or {},
            caption=f"Step {step.get('index')} ({step.get('phase', '?')})",
        )
        frame_path = frames_dir / f"frame_{idx:04d}.png"
        img.save(frame_path)
        frames.append(frame_path)
    return frames


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="hanoi-towers render", description="Render Hanoi session recordings."
    )
    parser.add_argument("--recording", required=True, help="Path to a recording json")
    parser.add_argument("--out-dir", default="artifacts/renders")
    parser.add_argument("--format", choices=["html", "ascii", "frames"], default="html")
    args = parser.parse_args(argv)

    rec_path = Path(args.recording)
    if not rec_path.exists():
        raise SystemExit(f"Recording not found: {rec_path}")
    try:
        recording = load_recording(rec_path)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Recording is not valid JSON: {rec_path} ({exc})") from exc
    except InvalidStateError as exc:
        raise SystemExit(f"Recording is corrupt: {rec_path} ({exc})") from exc

    out_dir = Path(args.out_dir) / rec_path.stem
    out_dir.mkdir(parents=True, exist_ok=True)

    if args.format == "ascii":
        (out_dir / "playback.txt").write_text(render_ascii(recording))
    elif args.format == "html":
        (out_dir / "index.html").write_text(render_html(recording))
    else:
        try:
            frames = render_frames(recording, out_dir)
        except RuntimeError as exc:
            raise SystemExit(str(exc)) from exc
        print(f"Frames written: {len(frames)}")

    print(f"Rendered to: {out_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
