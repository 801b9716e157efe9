import enum


class Config:
    """Base configuration."""

    WILDCARD = "*"
    ISOLATE_LISTENER_ERRORS = False


class StrictConfig(Config):
    """Listener exceptions abort the dispatch and reach the caller of emit."""


class IsolatedConfig(Config):
    """Listener exceptions are logged and the remaining listeners still run."""

    ISOLATE_LISTENER_ERRORS = True


class ConfigType(enum.Enum):
    STRICT = StrictConfig
    ISOLATED = IsolatedConfig
