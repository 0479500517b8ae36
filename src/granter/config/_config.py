"""Layered configuration for granter."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "GranterConfig",
    "configure",
    "get_global_config",
    "_reset_global_config",
    "_set_global_config",
]


@dataclass(frozen=True, slots=True)
class GranterConfig:
    """Process-wide settings with merge semantics.

    Attributes:
        log_decisions: Log a summary of every top-level evaluation to the
            ``granter`` logger.
        duration_precision: Decimal places kept for explain durations
            (milliseconds).
        forbidden_message: Template for the default ``ForbiddenError``
            message raised by ``or_throw``. ``{name}`` is replaced with the
            permission name.

    Example::

        config = GranterConfig(log_decisions=True)
        merged = config.merge(duration_precision=3)
    """

    log_decisions: bool = False
    duration_precision: int = 2
    forbidden_message: str = "Permission denied: {name}"

    def __post_init__(self) -> None:
        if (
            not isinstance(self.duration_precision, int)
            or isinstance(self.duration_precision, bool)
            or self.duration_precision < 0
        ):
            raise ValueError(
                f"duration_precision must be a non-negative int, got {self.duration_precision!r}"
            )
        if not isinstance(self.forbidden_message, str):
            raise ValueError(
                f"forbidden_message must be a string, got {self.forbidden_message!r}"
            )
        try:
            self.forbidden_message.format(name="permission")
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(
                f"forbidden_message may only use the {{name}} placeholder, "
                f"got {self.forbidden_message!r}"
            ) from exc

    def merge(
        self,
        *,
        log_decisions: bool | None = None,
        duration_precision: int | None = None,
        forbidden_message: str | None = None,
    ) -> GranterConfig:
        """Return a new config with non-None overrides applied.

        Example::

            base = GranterConfig()
            verbose = base.merge(log_decisions=True)
        """
        return GranterConfig(
            log_decisions=(log_decisions if log_decisions is not None else self.log_decisions),
            duration_precision=(
                duration_precision if duration_precision is not None else self.duration_precision
            ),
            forbidden_message=(
                forbidden_message if forbidden_message is not None else self.forbidden_message
            ),
        )


# ---------------------------------------------------------------------------
# Global configuration singleton
# ---------------------------------------------------------------------------

_global_config = GranterConfig()


def get_global_config() -> GranterConfig:
    """Return the current global configuration."""
    return _global_config


def configure(
    *,
    log_decisions: bool | None = None,
    duration_precision: int | None = None,
    forbidden_message: str | None = None,
) -> GranterConfig:
    """Update the global configuration by merging overrides.

    Only non-None values are applied. Returns the new global config.

    Example::

        configure(log_decisions=True)
        # Every top-level permission evaluation is now logged
    """
    global _global_config
    _global_config = _global_config.merge(
        log_decisions=log_decisions,
        duration_precision=duration_precision,
        forbidden_message=forbidden_message,
    )
    return _global_config


def _set_global_config(cfg: GranterConfig) -> None:
    """Replace global config with an exact snapshot. For testing only."""
    global _global_config
    _global_config = cfg


def _reset_global_config() -> None:
    """Reset global config to defaults. For testing only."""
    global _global_config
    _global_config = GranterConfig()
