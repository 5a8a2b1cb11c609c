# Services package init
"""
States API Backend — Services Layer
====================================

Service Inventory:
    - Catalog / load_catalog: immutable reference data for the 50 states
    - FactStore: key-value access to stored fun-fact lists
    - FactService: merges both and implements the fun-fact mutations

Services never touch HTTP objects; routes build them per request through
FastAPI dependencies, so they can be exercised directly in tests.
"""
