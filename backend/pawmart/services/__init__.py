# Services package init
"""
PawMart Backend — Services Layer
==================================

What:  Business logic layer sitting between routes (HTTP) and MongoDB.
Why:   Routes handle HTTP; services own ownership checks, filters and the
       translation of driver failures into application exceptions.
How:   Services are stateless singletons. The database handle and the
       caller's Identity are passed in on every call.

Service Inventory:
    - IdentityProvider (abstract): Interface for bearer-token verification
    - FirebaseIdentityProvider: Concrete implementation using Firebase Admin
    - DocumentStore: One MongoDB collection behind StorageError-safe methods
    - ListingService / AccountService / OrderService / SubscriptionService:
      one per collection
"""
