"""
Wallet - Source Package

The financial domain and derived-analytics engine behind a personal
finance tracker: ledger, budgets, recurring bills, savings goals and
monthly insights.

DESIGN PRINCIPLES:
1. One explicitly owned state container, injected everywhere
2. Every mutation announces itself; persistence just listens
3. Derived views are recomputed on demand, never cached
4. Degenerate input yields defined output (0%, not NaN)
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Wallet Team"
