"""Import fixtures from granter.testing for test discovery."""

from granter.testing._fixtures import call_log, granter_config, isolated_granter_config

__all__ = ["call_log", "granter_config", "isolated_granter_config"]
