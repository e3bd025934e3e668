class ServerError(Exception):
    pass

class BindError(ServerError):
    def __init__(self, host: str, port: int, cause: OSError):
        self.host = host
        self.port = port
        super().__init__(f"Failed to bind TCP listener on {host}:{port}: {cause}")
