"""Exception hierarchy for key extraction, validation and token synthesis."""


class TransactionError(Exception):
    """Base class. ``stage`` names the construction step that failed, if any."""

    def __init__(self, message: str, stage: str | None = None):
        self.stage = stage
        super().__init__(message)

    def __str__(self) -> str:
        msg = super().__str__()
        if self.stage:
            return f"[{self.stage}] {msg}"
        return msg


class ExtractionError(TransactionError):
    """The homepage or ondemand bundle did not have the expected structure."""


class PatternNotFound(ExtractionError):
    pass


class ParseError(ExtractionError):
    pass


class DecodeError(ExtractionError):
    pass


class InconsistentKeyMaterial(TransactionError):
    """Extracted fields do not agree with each other."""


class TransportError(TransactionError):
    def __init__(self, message: str, status: int | None = None, url: str | None = None, stage: str | None = None):
        self.status = status
        self.url = url
        super().__init__(message, stage=stage)


class RandomSourceError(TransactionError):
    pass
