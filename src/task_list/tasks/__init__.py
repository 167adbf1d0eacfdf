"""
Task subsystem.

Components:
- task_models.py: data structures (Priority, Task, TaskEdit)
- task_store.py: JSON-file storage of the full collection
- task_query.py: filters, sort orders and delete selectors
- task_api.py: add/edit/delete/list operations used by the CLI
"""
