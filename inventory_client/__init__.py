"""
Inventory management client.

Encrypted local session handling, route authorization, and client-side
pagination and aggregation of inventory API data.
"""

__version__ = "0.1.0"
