"""
Task subsystem.

Components:
- task_models.py: data structures (Todo, Deadline, Event, TaskKind)
- task_store.py: ordered in-memory TaskList that saves itself after each change
- task_codec.py: pipe-separated flat-file storage (load/save)
"""
