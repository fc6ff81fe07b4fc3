"""
Use cases for the campus activity API.

Each service orchestrates the repository to implement business rules
(sign-up, registration review, reporting). Routers call these services
instead of touching SQL sessions directly.
"""
