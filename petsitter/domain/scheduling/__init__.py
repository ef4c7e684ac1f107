"""
Scheduling Domain

Busy/free time computation for sitters, conflict detection with a travel
buffer around every visit, and visit planning with price suggestions.

- time_calculator.py: pure interval arithmetic over minutes since midnight
- availability_service.py: busy slots from the database, free slots, planning
- router.py: /scheduling endpoints
"""

from .router import router

__all__ = ["router"]
