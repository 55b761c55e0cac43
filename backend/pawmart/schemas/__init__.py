"""
PawMart Backend — Pydantic Schemas
====================================

What:  Request bodies, responses and the verified Identity.
Why:   Records in MongoDB are loosely structured, but each entity still has a
       handful of fields the application relies on (owner email, buyer email,
       category slug, name). The models check those at the boundary and let
       every other field through unchanged (`extra="allow"`).
"""
