"""
Expense Tracker - Source Package

A small personal finance tool for recording expenses and
monthly budgets in local JSON files.

DESIGN PRINCIPLES:
1. The repository owns the files, callers get copies
2. Every read/modify/write runs under one lock
3. Storage faults surface, they are never hidden
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
