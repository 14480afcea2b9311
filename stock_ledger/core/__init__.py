"""Core domain layer - entities, interfaces, services, and exceptions."""

from stock_ledger.core import entities, exceptions, interfaces

__all__ = ["entities", "interfaces", "exceptions"]
