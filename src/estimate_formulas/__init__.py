"""
Deterministic cost, percent and amount formulas for estimate line items.

This package contains the formula set (contingency, escalation, aggregated
fees, markup, gross margin, totals), the shared Decimal primitives it is built
on, and the host boundary that marshals values across a process or runtime
boundary.
"""

__version__ = "1.0.0"
