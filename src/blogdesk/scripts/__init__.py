"""Operational scripts run with ``python -m blogdesk.scripts.<name>``."""
