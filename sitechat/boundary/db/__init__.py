"""
Database boundary: SQLAlchemy base, connection factory and ORM models.
"""
