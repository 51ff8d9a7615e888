class MedrouteError(Exception):
    """Base exception for medroute errors."""

    pass


class ConfigurationMissing(MedrouteError):
    """Raised at startup when a required credential is absent."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"{setting} is required")


class BackendError(MedrouteError):
    """Raised when an external backend (generation or news) returns an error."""

    def __init__(self, backend: str, reason: str, status_code: int | None = None):
        self.backend = backend
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"{backend} backend failed: {reason}")


class BackendTimeout(BackendError):
    """Raised when an external backend call times out or the transport fails."""

    pass
