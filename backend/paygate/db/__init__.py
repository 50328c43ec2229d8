"""Database primitives — declarative Base shared by every ORM model."""
