# Routes package init
"""
Howl Backend — API Routes Package
===================================

Route Inventory:
    - businesses.py: /businesses            (list, create)
                     /businesses/{id}       (detail, replace, delete)
    - reviews.py:    /reviews, /reviews/{id}
    - photos.py:     /photos, /photos/{id}
    - health.py:     GET /health
    - params.py:     bounded record id path parameter

Routes stay thin: pull the session, call a service, choose the status code.
Validation, pagination and storage errors live in the services.
"""
