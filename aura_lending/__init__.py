"""
Aura Lending - Behavioral Credit Scoring & Embedded Lending Service

A FastAPI-based microservice that computes Aura Scores for merchant
accounts, originates Net Terms, Working Capital and Revenue-Based
Financing products, and tracks repayment through a payment ledger.
"""

__version__ = "0.1.0"
