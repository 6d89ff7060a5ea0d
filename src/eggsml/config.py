"""ContextVar-based wrap configuration for EggsML.

Holds the defaults that ``to_console_lines`` falls back to when a caller
does not pass them explicitly. The generic ``word_wrap`` never reads it.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from eggsml.config import WrapConfig, wrap_config_context

    with wrap_config_context(WrapConfig(wrap_width=60, hanging_indent=4)):
        lines = to_console_lines(parse(text))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WrapConfig:
    """Immutable console-wrap configuration.

    Attributes:
        wrap_width: Line width in characters
        hanging_indent: Extra indentation for continuation lines of a paragraph
        default_color: Console color (palette number 0-15) of untagged text

    """

    wrap_width: int = 80
    hanging_indent: int = 0
    default_color: int = 7

    @classmethod
    def from_dict(cls, config_dict: dict) -> "WrapConfig":
        """Create WrapConfig from a dictionary, ignoring unknown keys.

        Example:
            >>> WrapConfig.from_dict({"wrap_width": 40, "colour": "ignored"}).wrap_width
            40

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


_DEFAULT_CONFIG: WrapConfig = WrapConfig()

_wrap_config: ContextVar[WrapConfig] = ContextVar(
    "wrap_config",
    default=_DEFAULT_CONFIG,
)


def get_wrap_config() -> WrapConfig:
    """Get the wrap configuration of the current context."""
    return _wrap_config.get()


def set_wrap_config(config: WrapConfig) -> None:
    """Set the wrap configuration for the current context."""
    _wrap_config.set(config)


def reset_wrap_config() -> None:
    """Reset the current context to the default configuration."""
    _wrap_config.set(_DEFAULT_CONFIG)


@contextmanager
def wrap_config_context(config: WrapConfig) -> Iterator[None]:
    """Use ``config`` within the block, restoring the previous one afterwards.

    The previous config is restored even if an exception is raised.
    """
    previous = _wrap_config.get()
    _wrap_config.set(config)
    try:
        yield
    finally:
        _wrap_config.set(previous)


__all__ = [
    "WrapConfig",
    "get_wrap_config",
    "set_wrap_config",
    "reset_wrap_config",
    "wrap_config_context",
]
