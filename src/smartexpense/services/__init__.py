"""Service module exports."""

from . import export_csv, export_pdf, ledger_service, reports

__all__ = [
    "export_csv",
    "export_pdf",
    "ledger_service",
    "reports",
]
