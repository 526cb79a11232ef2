"""
Utility functions module.

Date-range helpers shared by the ledger and the trade simulator.

Date Semantics:
- Observation dates are trading days; gaps (weekends, holidays) are simply absent
- Option tenor counts trading-day rows, converted to years at 252 per year
- The ledger walks every calendar day, weekends included
"""
