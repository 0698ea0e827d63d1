"""
Accounting Copilot - Source Package

A single-user journal manager: journal entries kept in a plain text
file and edited through an interactive command loop.

DESIGN PRINCIPLES:
1. The store owns ids, totals and tombstones
2. Nothing is ever physically deleted
3. Memory and disk never silently diverge: a failed save stops the process
4. Every change is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Accounting Copilot Team"
