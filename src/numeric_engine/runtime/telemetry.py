"""Telemetry for the numeric engine, built on telelog.

Public surface:

``TelemetrySettings.from_env()`` -- read ``NUMERIC_ENGINE_*`` variables
``configure(...)`` -- adopt explicit settings, a preset, or a raw telelog config
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event
``span(name, ...)`` -- profile a block and optionally track it as a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "NUMERIC_ENGINE_"
DEFAULT_LOGGER_NAME = "numeric_engine"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Logger options resolved from the environment."""

    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def from_env(cls) -> "TelemetrySettings":
        return cls(
            level=(_env("LOG_LEVEL") or "INFO").upper(),
            console=not _env_flag("DISABLE_CONSOLE", False),
            colored=not _env_flag("NO_COLOR", False),
            json=_env_flag("LOG_JSON", False),
            log_file=_env("LOG_FILE") or "",
            buffered=_env_flag("LOG_BUFFERED", False),
            buffer_size=_env_int("LOG_BUFFER_SIZE", 2048),
        )

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffered:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        # Spans rely on logger.profile, so profiling is always on.
        config.with_profiling(True)
        return config


_PRESETS: Dict[str, TelemetrySettings] = {
    "development": TelemetrySettings(level="DEBUG", console=True, colored=True),
    "production": TelemetrySettings(
        level="INFO", console=False, log_file="numeric_engine.log", buffered=True
    ),
    "quiet": TelemetrySettings(level="ERROR", console=False),
}


def configure(
    *,
    settings: Optional[TelemetrySettings] = None,
    preset: Optional[str] = None,
    config: Optional[Any] = None,
) -> None:
    """Replace the active telelog configuration and drop cached loggers.

    Parameters
    ----------
    settings:
        Explicit :class:`TelemetrySettings`.
    preset:
        ``"development"``, ``"production"`` or ``"quiet"``.
    config:
        A ready-made ``telelog.Config``; profiling is forced on.

    At most one of the three may be given. With none, settings are read from
    the environment.
    """

    global _ACTIVE_CONFIG
    if sum(option is not None for option in (settings, preset, config)) > 1:
        raise ValueError("Provide only one of `settings`, `preset` or `config`.")

    if preset is not None:
        try:
            settings = _PRESETS[preset.lower()]
        except KeyError as exc:
            raise ValueError(f"Unknown preset '{preset}'.") from exc

    if config is not None:
        config.with_profiling(True)
        _ACTIVE_CONFIG = config
    else:
        _ACTIVE_CONFIG = (settings or TelemetrySettings.from_env()).build()
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = TelemetrySettings.from_env().build()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ensure_config()
        )
    return _LOGGER_CACHE[logger_name]


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _level_method(logger: Any, level: str) -> Tuple[Any, bool]:
    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, structured = _level_method(logger, level)
    if structured:
        method(message, _pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` as structured pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Handle yielded by :func:`span`."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block, optionally tracking it as a telelog component.

    ``component=True`` reuses ``name`` as the component id. ``metadata`` is
    pushed as logger context for the duration of the block.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None

    context: Dict[str, str] = {
        key: _stringify(value) for key, value in (metadata or {}).items()
    }
    for key, value in context.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(context),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context:
                log.remove_context(key)


configure()
logger = get_logger()

__all__ = [
    "SpanHandle",
    "TelemetrySettings",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
