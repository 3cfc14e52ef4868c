from typing import Any


class SigoError(ValueError):
    """Base class for domain validation failures raised by the eligibility engine."""


class InvalidCodeError(SigoError):
    def __init__(self, invalid_codes: list[str]):
        self.invalid_codes = list(invalid_codes)
        super().__init__(f"Códigos de restrição inválidos: {', '.join(self.invalid_codes)}")


class InvalidIntervalError(SigoError):
    pass


class LeaveConflictError(SigoError):
    """Raised by callers that prefer an exception over the returned conflict."""

    def __init__(self, conflict: Any):
        self.conflict = conflict
        message = "CONFLITO: Já existe afastamento no período"
        kind = getattr(conflict, "type", None)
        start = getattr(conflict, "start_date", None)
        if kind and start:
            message += f". Tipo: {kind}, Início: {start:%d/%m/%Y}"
        super().__init__(message)
