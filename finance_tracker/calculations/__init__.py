"""
Financial Calculation Engine

Pure, stateless functions for loan amortization, compound growth, wealth
projection and forecasting. Nothing here touches the record store.
"""

from finance_tracker.calculations import amortization, growth, forecast

__all__ = ["amortization", "growth", "forecast"]
