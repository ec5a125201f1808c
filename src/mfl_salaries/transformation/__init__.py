"""
Transformation Layer - Pure, Deterministic Functions

This layer contains all business logic.
- Salary reconciliation (max wins across sources)
- Position ranking (top N per position)
- No network I/O, unit testable, deterministic results
"""
