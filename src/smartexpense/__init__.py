"""SmartExpense personal income and expense tracker."""

from __future__ import annotations

from .config import BaseConfig
from .domain import Ledger
from .services.ledger_service import ledger_session, open_ledger, save_ledger

__all__ = ["BaseConfig", "Ledger", "ledger_session", "open_ledger", "save_ledger"]
