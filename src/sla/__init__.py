"""
SLA Tracking Module
===================

Bounded Context for service level tracking and escalation.

Responsibilities:
- Calculate deadlines from priority-based service levels
- Classify items as on time, at risk, overdue or completed
- Decide which escalation tier should be notified
- Report resolution compliance
- Periodically re-evaluate snapshots supplied by collaborators
"""

__version__ = "1.0.0"
