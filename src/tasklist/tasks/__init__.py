"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Page)
- task_store.py: CSV-backed in-memory store + search/pagination
- task_api.py: title validation and small high-level helpers used by the web layer
"""
