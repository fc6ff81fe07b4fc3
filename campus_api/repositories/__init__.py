"""
Persistence adapters.

Services depend on SQLRepository instead of opening sessions themselves, so
tests can hand them a repository bound to a throwaway SQLite database.
"""
