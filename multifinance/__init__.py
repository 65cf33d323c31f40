"""
Multifinance - Credit-Limit Transaction Service

A FastAPI-based microservice that records customers' purchase-on-credit
transactions against pre-approved, per-tenor credit limits.
"""

__version__ = "0.1.0"
