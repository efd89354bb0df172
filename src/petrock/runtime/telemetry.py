"""Logging for petrock, backed by telelog.

A generator run is a short CLI invocation whose real output is the list of
files it wrote, so the console only shows warnings unless asked otherwise.
Three calls cover everything petrock logs:

``configure(preset=...)`` -- pick ``verbose``, ``quiet`` or ``json`` on top of
the ``PETROCK_*`` environment settings
``record_event(name, ...)`` -- one structured line per milestone
``span(name, ...)`` -- profile a block; expected misses listed in
``quiet_errors`` are logged at debug level, anything else as an error
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "PETROCK_"
ROOT_LOGGER = "petrock"
DEFAULT_LEVEL = "WARNING"
DEFAULT_BUFFER_SIZE = 2048
PRESETS = ("verbose", "quiet", "json")

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_config: Optional[Any] = None
_loggers: Dict[str, Any] = {}


def env_setting(name: str) -> Optional[str]:
    """Return ``PETROCK_<name>``, treating an empty value as unset."""
    return os.environ.get(ENV_PREFIX + name) or None


def env_flag(name: str, default: bool = False) -> bool:
    value = env_setting(name)
    if value is None:
        return default
    return value.lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    """Resolved logging options, turned into a ``telelog.Config`` by :meth:`build`."""

    level: str = DEFAULT_LEVEL
    console: bool = True
    color: bool = True
    json_format: bool = False
    log_file: Optional[str] = None
    buffer_size: Optional[int] = None

    @classmethod
    def from_env(cls) -> "Settings":
        buffer_size = None
        if env_flag("LOG_BUFFERED"):
            buffer_size = int(env_setting("LOG_BUFFER_SIZE") or DEFAULT_BUFFER_SIZE)
        return cls(
            level=(env_setting("LOG_LEVEL") or DEFAULT_LEVEL).upper(),
            console=not env_flag("DISABLE_CONSOLE"),
            color=not env_flag("NO_COLOR"),
            json_format=env_flag("LOG_JSON"),
            log_file=env_setting("LOG_FILE"),
            buffer_size=buffer_size,
        )

    @classmethod
    def for_preset(cls, preset: str) -> "Settings":
        base = cls.from_env()
        if preset == "verbose":
            return replace(base, level="DEBUG")
        if preset == "quiet":
            return replace(base, level="ERROR")
        if preset == "json":
            return replace(base, level="INFO", json_format=True, color=False)
        raise ValueError(
            f"unknown log preset {preset!r} (expected one of: {', '.join(PRESETS)})"
        )

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        config.with_json_format(self.json_format)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffer_size:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        # span() wraps every block in logger.profile
        config.with_profiling(True)
        return config


def configure(
    *, preset: Optional[str] = None, settings: Optional[Settings] = None
) -> Settings:
    """Replace the active configuration and drop cached loggers."""

    global _config
    if preset is not None and settings is not None:
        raise ValueError("pass either a preset or settings, not both")
    if preset is not None:
        settings = Settings.for_preset(preset)
    resolved = settings or Settings.from_env()
    _config = resolved.build()
    _loggers.clear()
    return resolved


def get_logger(name: Optional[str] = None) -> Any:
    global _config
    name = name or ROOT_LOGGER
    if name not in _loggers:
        if _config is None:
            _config = Settings.from_env().build()
        _loggers[name] = tl.Logger.with_config(name, _config)
    return _loggers[name]


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _emit(logger: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    pairs = [(str(key), _text(value)) for key, value in fields.items()]
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, pairs)
        return
    plain = getattr(logger, level, None)
    if plain is None:
        raise ValueError(f"unsupported log level {level!r}")
    plain(f"{message} {dict(pairs)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level.lower(), f"event::{name}", data or {})


@dataclass
class Span:
    """The block being profiled; callers attach details as they learn them."""

    name: str
    logger: Any
    fields: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.fields[key] = _text(value)

    def report(self, level: str, outcome: str, exc: BaseException) -> None:
        _emit(
            self.logger,
            level,
            f"span::{outcome}",
            {"span": self.name, **self.fields, "error": f"{type(exc).__name__}: {exc}"},
        )


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    quiet_errors: Tuple[type[BaseException], ...] = (),
) -> Iterator[Span]:
    log = get_logger(logger_name)
    current = Span(name, log, {key: _text(value) for key, value in (metadata or {}).items()})
    if component:
        current.fields["component"] = component

    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield current
        except quiet_errors as exc:
            current.report("debug", "miss", exc)
            raise
        except Exception as exc:
            current.report("error", "fail", exc)
            raise


__all__ = [
    "PRESETS",
    "Settings",
    "Span",
    "configure",
    "env_flag",
    "env_setting",
    "get_logger",
    "record_event",
    "span",
]
