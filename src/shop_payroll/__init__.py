"""Shop timekeeping and payroll reporting."""

__version__ = "0.1.0"
