from fixtura.integrations.pytest_plugin.plugin import _fixtura_current_registry, fixtura_registry

__all__ = ["_fixtura_current_registry", "fixtura_registry"]
