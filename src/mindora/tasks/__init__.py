"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, lifecycle rules)
- task_store.py: ordered collection persisted to key-value storage
- task_api.py: form/edit/filter helpers used by the presentation layer
"""
