"""
SkyRoutes Backend - Services Layer
===================================

What:  Query logic between the HTTP routes and the database.

Service Inventory:
    - predicates.py:       Predicate builder (FilterSet → WHERE conditions)
    - route_query.py:      Paginated query executor + RouteService
    - catalog_service.py:  Airline, airport and country listings
    - stats_service.py:    Fixed aggregate statistics

Services take the request's AsyncSession as an argument and keep no state
of their own, so one module-level instance serves all requests.
"""
