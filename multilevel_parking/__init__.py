"""Multi-floor parking lot: slot allocation, tickets and occupancy reporting."""

__version__ = "1.0.0"
