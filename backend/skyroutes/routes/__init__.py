"""
SkyRoutes Backend - API Routes Package
=======================================

What:  HTTP route handlers. All endpoints are read-only GETs.

Route Inventory:
    - route_search.py:  GET /routes                      (generic filtered routes)
    - airports.py:      GET /airports                    (airport listing)
                        GET /airports/{iata}/routes      (routes by airport)
    - countries.py:     GET /countries                   (country listing)
                        GET /countries/{country}/routes  (routes by country)
    - airlines.py:      GET /airlines
    - stats.py:         GET /stats
    - health.py:        GET /health

Handlers stay thin: they take every parameter as a raw string, hand it to a
service and return the service's response model.
"""
