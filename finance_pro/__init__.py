"""
Finance Pro - Source Package

A personal budget tracker that projects net pay on fixed paydays and
shows how much of the last pay is left after the monthly bills.

DESIGN PRINCIPLES:
1. The projection engine is pure: snapshots in, view model out
2. Storage and identity are swappable collaborators
3. Fail visibly at the write boundary, never inside the calculations
4. Every write outcome is logged
"""

__version__ = "1.0.0"
__author__ = "Finance Pro Team"
