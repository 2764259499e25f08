from core.config.loader import ConfigLoader, arcadia_config  # noqa: F401
