# Routes package init
"""
GymPass Backend — API Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - users.py:     POST /users, GET /me
    - sessions.py:  POST /sessions, PATCH /token/refresh
    - gyms.py:      POST /gyms (admin), GET /gyms/search, GET /gyms/nearby
    - check_ins.py: POST /gyms/{gym_id}/check-ins, PATCH /check-ins/{id}/validate (admin),
                    GET /check-ins/history, GET /check-ins/metrics
    - health.py:    GET /health

Routes stay thin: parse the request, call a service obtained through
`gympass.dependencies`, shape the response. Domain errors propagate to the
global exception handlers in main.py.
"""
