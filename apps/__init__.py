# apps/__init__.py

"""
Student Project Monitor - Django applications

- core: users, project records, authentication
- projects: JSON project endpoints (list, add, delete)
- dashboard: client-side state and rendering engine
"""

__version__ = '1.0.0'
