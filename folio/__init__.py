"""
Folio Accounts

User accounts backend: registration, sign-in and profile management.
"""
