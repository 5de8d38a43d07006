"""
EMS Tracker.
Downloads delivery status information from EMS Russian Post by tracking code.
"""

__version__ = "0.1.0"
