"""Telemetry services built directly on telelog.

The replacer keeps its logging surface small:

``TelemetrySettings.from_env()`` -- read ``TEXT_REPLACER_*`` variables
``configure(...)`` -- adopt explicit settings or a named preset
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager marrying profiling + component tracking
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TEXT_REPLACER_"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None
_ACTIVE_SETTINGS: Optional["TelemetrySettings"] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return repr(bytes(value))
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Resolved logging options for the replacer."""

    logger_name: str = "text_replacer"
    level: str = "WARNING"
    console: bool = True
    colored: bool = True
    json_format: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = 2048
    profiling: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", self.level.upper())
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be positive")

    @classmethod
    def from_env(cls) -> "TelemetrySettings":
        console = not _env_flag("DISABLE_CONSOLE", False)
        return cls(
            logger_name=_env("LOGGER") or "text_replacer",
            level=_env("LOG_LEVEL") or "WARNING",
            console=console,
            colored=console and not _env_flag("NO_COLOR", False),
            json_format=_env_flag("LOG_JSON", False),
            log_file=_env("LOG_FILE") or "",
            buffered=_env_flag("LOG_BUFFERED", False),
            buffer_size=int(_env("LOG_BUFFER_SIZE") or "2048"),
        )

    @classmethod
    def preset(cls, name: str) -> "TelemetrySettings":
        base = cls.from_env()
        key = name.lower()
        if key == "development":
            return replace(
                base, level="DEBUG", console=True, colored=True, json_format=False
            )
        if key == "production":
            return replace(
                base,
                level="INFO",
                console=False,
                colored=False,
                log_file=base.log_file or "text_replacer.log",
                buffered=True,
            )
        if key == "quiet":
            return replace(
                base, level="ERROR", console=False, colored=False, profiling=False
            )
        raise ValueError(f"Unknown preset '{name}'.")


def _build_config(settings: TelemetrySettings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    if settings.json_format:
        config.with_json_format(True)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    config.with_profiling(settings.profiling)
    return config


def configure(
    *, settings: Optional[TelemetrySettings] = None, preset: Optional[str] = None
) -> TelemetrySettings:
    """Adopt a new telelog configuration and drop cached loggers.

    Parameters
    ----------
    settings:
        Explicit settings to adopt.
    preset:
        Named preset (``"development"``, ``"production"``, ``"quiet"``).
        ``settings`` and ``preset`` are mutually exclusive. With neither, the
        ``TEXT_REPLACER_*`` environment is read.
    """

    global _ACTIVE_CONFIG, _ACTIVE_SETTINGS
    if settings and preset:
        raise ValueError("Provide either `settings` or `preset`, not both.")

    if preset:
        settings = TelemetrySettings.preset(preset)
    elif settings is None:
        settings = TelemetrySettings.from_env()

    _ACTIVE_CONFIG = _build_config(settings)
    _ACTIVE_SETTINGS = settings
    _LOGGER_CACHE.clear()
    return settings


def active_settings() -> TelemetrySettings:
    if _ACTIVE_SETTINGS is None:
        return configure()
    return _ACTIVE_SETTINGS


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` configured for the replacer."""

    settings = active_settings()
    logger_name = name or settings.logger_name
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ACTIVE_CONFIG
        )
    return _LOGGER_CACHE[logger_name]


def _resolve_level_method(
    logger: Any, level: Any, *, expect_data: bool = False
) -> Tuple[Any, bool]:
    name = str(level).lower()
    if expect_data:
        with_attr = getattr(logger, f"{name}_with", None)
        if with_attr is not None:
            return with_attr, True

    attr = getattr(logger, name, None)
    if attr is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return attr, False


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` record."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    method, accepts_data = _resolve_level_method(log, level, expect_data=True)
    message = f"event::{name}"
    if accepts_data:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for metadata updates inside the block."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    failed: bool = False

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _emit(
        self, level: str, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})

        method, accepts = _resolve_level_method(self.logger, level, expect_data=True)
        if accepts:
            method(message, _format_pairs(payload))
        else:
            method(f"{message} {payload}")

    def debug(self, message: str, **extra: Any) -> None:
        self._emit("debug", message, extra)

    def fail(self, reason: str) -> None:
        if self.failed:
            return
        self.failed = True
        self._emit("error", "span::fail", {"reason": reason})


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a code block and (optionally) track it as a component.

    ``component=True`` reuses ``name`` as the component identifier; a string
    is used verbatim. ``metadata`` is attached as transient logger context for
    the duration of the block.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    context_keys = []
    metadata_payload: Dict[str, Any] = {}
    if metadata:
        for key, value in metadata.items():
            serialized = _stringify(value)
            metadata_payload[key] = serialized
            log.add_context(key, serialized)
            context_keys.append(key)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))

        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(metadata_payload),
        )

        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context_keys:
                log.remove_context(key)


__all__ = [
    "SpanHandle",
    "TelemetrySettings",
    "active_settings",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
