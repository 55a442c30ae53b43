# apps/projects/__init__.py
