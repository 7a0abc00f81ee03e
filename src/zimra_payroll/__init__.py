"""Zimbabwe statutory payroll tax engine (PAYE, AIDS levy, NSSA)."""

__version__ = "0.1.0"
