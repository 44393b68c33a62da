"""
Application Modules.

- backend/: API, services, database, blob storage, configuration
"""
