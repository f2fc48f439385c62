"""
API package for the customer/agent/company CRUD service.

Modules:
- config: environment-driven settings
- db: PostgreSQL connection pooling + query helpers
- tables: table definitions and parameterized CRUD statements
- schemas: Pydantic request/response models
- serialization: JSON-safe numeric policy for outbound records
- errors: 400/500 exception handlers
- routes: one router per resource
"""
