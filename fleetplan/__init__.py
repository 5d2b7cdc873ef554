"""
fleetplan: flight scheduling engine for a single operator.

Decides whether a candidate flight (aircraft + route + departure time) can be
scheduled, derives its block times and fares, and composes matching return
flights:
1. Great-circle distance and flight-time derivation
2. Aircraft availability across overlapping block windows
3. Three-tier fare pricing and flight-number allocation
"""

__version__ = "0.1.0"
