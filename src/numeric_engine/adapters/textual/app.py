"""Executable Textual app hosting a single numeric input."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when the demo runs
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use numeric_engine.adapters.textual.app"
    ) from exc

from numeric_engine.engine import NumericEngine
from numeric_engine.formatting import StepDirection
from numeric_engine.grammar import ClampPolicy, GrammarConfig
from numeric_engine.host import DEFAULT_HOLD_DELAY_MS, DEFAULT_HOLD_INTERVAL_MS, HostMirror

from .controller import TextualNumericAdapter, TextualUIHooks

CARET = "▏"


def render_mirror(mirror: HostMirror) -> str:
    """Return the displayed text with a caret marker when the caret is visible."""

    if not mirror.caret_visible:
        return mirror.text
    return mirror.text[: mirror.caret] + CARET + mirror.text[mirror.caret :]


class StepButton(Static):
    """Spinner half that steps while the mouse button is held."""

    def __init__(self, label: str, direction: StepDirection, **kwargs: Any) -> None:
        super().__init__(label, **kwargs)
        self.direction = direction

    def on_mouse_down(self, event: events.MouseDown) -> None:
        app = self.app
        if isinstance(app, NumericInputApp) and app.adapter:
            app.adapter.press_step(self.direction)
        event.stop()

    def on_mouse_up(self, event: events.MouseUp) -> None:
        app = self.app
        if isinstance(app, NumericInputApp) and app.adapter:
            app.adapter.release_step()
        event.stop()


@dataclass
class UIState:
    display_text: str = ""
    status_text: str = ""


class NumericInputApp(App[None]):
    """Minimal Textual UI embedding the numeric engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#input-row {
		height: 3;
	}

	#number-view {
		width: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	.step-button {
		width: 5;
		border: round $secondary;
		content-align: center middle;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        config: GrammarConfig,
        *,
        initial: str = "",
        step_size: float = 1.0,
        hold_delay_ms: int = DEFAULT_HOLD_DELAY_MS,
        hold_interval_ms: int = DEFAULT_HOLD_INTERVAL_MS,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._config = config
        self._initial = initial
        self._step_size = step_size
        self._hold_delay_ms = hold_delay_ms
        self._hold_interval_ms = hold_interval_ms
        self.adapter: TextualNumericAdapter | None = None
        self._number_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical():
            with Horizontal(id="input-row"):
                self._number_widget = Static("", id="number-view")
                yield self._number_widget
                yield StepButton("▲", StepDirection.UP, classes="step-button")
                yield StepButton("▼", StepDirection.DOWN, classes="step-button")
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        engine = NumericEngine(
            self._config, self._initial, step_size=self._step_size, name="demo"
        )
        hooks = TextualUIHooks(
            update_text=self._update_text,
            update_status=self._update_status,
            handle_event=self._handle_event,
        )
        self.adapter = TextualNumericAdapter(
            engine,
            hooks,
            hold_delay_ms=self._hold_delay_ms,
            hold_interval_ms=self._hold_interval_ms,
        )
        self.set_interval(0.02, self._process_timers)

    def _process_timers(self) -> None:
        if self.adapter:
            self.adapter.process_timers()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        if event.key in {"ctrl+c", "ctrl+q"}:
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()

    async def on_paste(self, event: events.Paste) -> None:
        if self.adapter:
            self.adapter.handle_paste(event.text)
        event.stop()

    def _update_text(self, mirror: HostMirror) -> None:
        self._state.display_text = render_mirror(mirror)
        if self._number_widget:
            self._number_widget.update(self._state.display_text)
        if not mirror.caret_visible and self.adapter:
            self.call_after_refresh(self.adapter.restore_caret)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "value.commit" and self.adapter:
            self._update_status(f"committed::{self.adapter.engine.current_raw()}")


def _env_float(key: str) -> Optional[float]:
    value = os.environ.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def build_config(args: argparse.Namespace) -> GrammarConfig:
    return GrammarConfig(
        decimal_separator=args.decimal_separator,
        thousands_separator=args.thousands_separator or None,
        allow_leading_zeros=args.allow_leading_zeros,
        decimal_scale=args.decimal_scale,
        fixed_decimal_scale=args.fixed_decimal_scale,
        min=args.min,
        max=args.max,
        clamp_policy=ClampPolicy.parse(args.clamp),
        prefix=args.prefix,
        suffix=args.suffix,
    )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the numeric engine Textual demo.")
    parser.add_argument("--decimal-separator", default=".")
    parser.add_argument("--thousands-separator", default="")
    parser.add_argument("--decimal-scale", type=int, default=None)
    parser.add_argument("--fixed-decimal-scale", action="store_true")
    parser.add_argument("--allow-leading-zeros", action="store_true")
    parser.add_argument(
        "--min", type=float, default=_env_float("NUMERIC_ENGINE_DEMO_MIN")
    )
    parser.add_argument(
        "--max", type=float, default=_env_float("NUMERIC_ENGINE_DEMO_MAX")
    )
    parser.add_argument(
        "--clamp",
        default=os.environ.get("NUMERIC_ENGINE_DEMO_CLAMP", "on_commit"),
        help="none, on_commit or strict (default: on_commit)",
    )
    parser.add_argument("--prefix", default="")
    parser.add_argument("--suffix", default="")
    parser.add_argument("--step", type=float, default=1.0)
    parser.add_argument("--initial", default="")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = NumericInputApp(build_config(args), initial=args.initial, step_size=args.step)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
