class SignalInstallError(Exception):
    def __init__(self, trigger_name: str, cause: Exception):
        self.trigger_name = trigger_name
        super().__init__(f"Failed to install {trigger_name} handler: {cause}")
