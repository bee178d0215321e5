"""
Finance Tracker - Ledger Engine

A personal transaction ledger: records expenses and incomes, persists
them between sessions and answers filtered, sorted and aggregated
queries over them.

DESIGN PRINCIPLES:
1. The in-memory ledger is authoritative for the session
2. Every mutation persists a complete snapshot
3. Queries are pure functions, recomputed on demand
4. Storage is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
