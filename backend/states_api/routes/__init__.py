# Routes package init
"""
States API Backend — API Routes Package
========================================

Route Inventory:
    - states.py:  /states and /states/{code}/...   (catalog + fun facts)
    - health.py:  GET /health                      (service health check)

Routes stay thin: they extract path, query and body values, call the
FactService or the Catalog, and return response models. Status codes for
failures come from the global exception handlers in main.py.
"""
