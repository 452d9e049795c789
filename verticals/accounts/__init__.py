"""Accounts vertical: user registration, login and token issuance.

- SQLAlchemy user model with unique username/email indexes
- Async repository that turns unique-index violations into conflicts
- Credential verification against bcrypt hashes
- FastAPI router for /login and /register
"""
