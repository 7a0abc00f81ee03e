"""FastAPI dependencies for dependency injection."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from zimra_payroll.calculators.tax_tables import TaxTableRegistry
from zimra_payroll.config import Settings, get_settings
from zimra_payroll.services.payroll_service import build_registry


@lru_cache(maxsize=1)
def get_registry() -> TaxTableRegistry:
    """Tax tables are loaded once per process and never mutated."""
    return build_registry(get_settings())


# Type aliases for cleaner dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
Registry = Annotated[TaxTableRegistry, Depends(get_registry)]
