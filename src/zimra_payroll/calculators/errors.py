"""Calculation errors."""

from __future__ import annotations


class DomainError(Exception):
    """Raised when a calculation is asked to do something undefined."""

    code = "DOMAIN_ERROR"


class InvalidPayrollComponentError(DomainError):
    """Raised by a strict composer when components violate the input contract."""

    code = "INVALID_PAYROLL_COMPONENT"

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"InvalidPayrollComponent: {'; '.join(self.errors)}")
