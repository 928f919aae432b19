class DepGraphError(Exception):
    "Base class for dependency graph errors."
    pass

class ConfigError(DepGraphError):
    "The project resolution config is missing or cannot be parsed."
    pass
