"""
Domain layer - records and persistence entities.

records.py holds the immutable values the resolution engine works on;
entities.py holds the SQLAlchemy tables the store persists them in.
"""
