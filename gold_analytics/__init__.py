"""
Gold Analytics Reporting Layer

Customer and product reports and ad-hoc analytical queries over the retail
gold star schema.
"""

__version__ = "1.0.0"
