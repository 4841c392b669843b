"""
Shared, cross-cutting code for the council API.

`core/` holds the small building blocks every feature uses (DB pool,
environment settings, logging, blob storage, the camelCase schema base).
Feature-specific SQL and business rules belong in the feature package
(e.g. `questions/`).
"""
