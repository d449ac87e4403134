"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus) + JSON record codec
- task_store.py: JSON file storage with load-time repair and atomic save
- task_registry.py: pure helpers over the in-memory task list
"""
