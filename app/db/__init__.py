"""Database package - declarative Base shared by models and migrations."""
