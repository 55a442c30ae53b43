# apps/core/__init__.py

"""
Core - users, project records and authentication

Contains:
- Models (Usuario, Project) and their migrations
- Authentication service and JSON auth endpoints
- Admin registration and the seed command
"""
