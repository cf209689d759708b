"""
Services Package

Business logic services for Finance Tracker.

Modules:
- ownership: resource ownership and admin override decisions
- transactions: transaction create/update/delete workflow
"""

from app.services import ownership, transactions

__all__ = ["ownership", "transactions"]
