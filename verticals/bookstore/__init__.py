"""Bookstore vertical: the book catalog.

- SQLAlchemy Book model with an integer identity key
- Async repository with CRUD + exact author/category filters
- FastAPI router guarded by bearer authentication
"""
