"""
Shared Kernel Module
====================

This module contains shared infrastructure and domain elements used across
all bounded contexts (SLA Tracking and Workforce Balancing).

Architecture Pattern: Modular Monolith
- Each module (sla, workforce) is a bounded context
- Shared kernel contains only generic infrastructure and value types
- Domain models are extended within each module

DO NOT add business logic from SLA or Workforce to shared kernel.
"""

__version__ = "1.0.0"
