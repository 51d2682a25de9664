"""
Workforce Balancing Module
==========================

Bounded Context for staff assignment suggestions and load balancing.

Responsibilities:
- Scope staff and items to a supervisor's jurisdiction
- Rank staff for an assignment by availability, capacity and distance
- Propose reassignments away from overloaded staff
- Summarise roster load
"""

__version__ = "1.0.0"
