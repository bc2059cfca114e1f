"""
Money Tracker - Source Package

A personal income/expense ledger: record entries, keep them on disk,
and see where the money went.

DESIGN PRINCIPLES:
1. Every change is saved immediately
2. Totals are always computed from the entries, never cached
3. Bad input is rejected, never silently corrected
4. A missing or damaged data file means an empty ledger, not a crash
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Money Tracker Team"
