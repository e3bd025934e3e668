class ConfigError(Exception):
    pass

class MissingConfigError(ConfigError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is not set")
