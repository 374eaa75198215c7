"""
Infrastructure layer for the billing service.

This layer contains the implementation details for external systems integration:
- Database (SQLAlchemy with PostgreSQL)
- Authentication (session JWT and integration API tokens)
- Scheduling (Celery beat)
- HTTP (FastAPI routers and middleware)

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
