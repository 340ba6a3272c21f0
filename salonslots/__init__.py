"""
salonslots - appointment slot computation and availability checks for salons.
"""

__version__ = "0.1.0"
