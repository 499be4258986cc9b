# backend/settings/__init__.py
"""
Settings package. Nothing is imported here; pick a module explicitly:
- backend.settings.dev   local development (manage.py default)
- backend.settings.test  test suite (manage.py test / pytest default)
- backend.settings.prod  production
"""
