"""Domain Error Base Class"""


class DomainError(Exception):
    """Base class for ranking domain errors

    Carries a machine-readable ``code`` next to the human message so callers
    can log or branch on it without parsing strings.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
