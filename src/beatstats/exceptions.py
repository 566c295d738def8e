class BeatStatsError(Exception):
    """Base exception for beatstats errors."""
    pass

class ConfigError(BeatStatsError):
    """Configuration loading specific errors."""
    pass

class InvalidArgumentError(BeatStatsError, ValueError):
    """Caller passed an argument the engine cannot work with."""
    pass
