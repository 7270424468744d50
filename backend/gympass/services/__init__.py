# Services package init
"""
GymPass Backend — Services Layer
=================================

What:  Use cases sitting between routes (HTTP) and repositories (persistence).
How:   Each service receives its repositories (and a clock) in its
       constructor; FastAPI dependencies assemble them per request.

Service Inventory:
    - geo.py:              Haversine distance + bounding box helpers
    - clock.py:            UTC "now" and calendar-day helpers
    - users_service.py:    Register, authenticate, profile
    - gyms_service.py:     Create, search by title, fetch nearby
    - check_ins_service.py: Check-in eligibility, validation, history, metrics
"""
