"""
EasyFinance - Source Package

Personal and family finance tracking: projects, categories, incomes and
expenses, plus account management against the EasyFinance API.

DESIGN PRINCIPLES:
1. Entities validate every value before storing it
2. Fail early, fail visibly
3. No silent corrections
4. Every change is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
