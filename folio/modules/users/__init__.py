"""
User Accounts Module

Account management with clear separation of concerns:
- auth: Password hashing, tokens and the current-user dependency
- domain: Domain models
- services: Business logic
- repositories: Data access
- api: REST API endpoints
"""
