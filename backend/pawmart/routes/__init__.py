# Routes package init
"""
PawMart Backend — API Routes Package
======================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - health.py:         GET    /                                   (liveness)
    - users.py:          GET    /users, POST /users
    - listings.py:       GET    /listings, /listing/{id}, /recent-products,
                                /myListings/{email}, /category-filtered-product/{category},
                                /search
                         POST   /listings
                         PATCH  /updateItem/{id}
                         DELETE /myListings/{id}
    - orders.py:         GET    /myOrders/{email}, POST /orders
    - subscriptions.py:  POST   /subscription

Design Principle:
    Routes are THIN: declare the auth dependency where a route is protected,
    pull the database handle, call one service method. No try/except here;
    global handlers in main.py format every error.
"""
