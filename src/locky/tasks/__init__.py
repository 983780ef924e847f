"""
Task subsystem.

Components:
- task_models.py: data structures (Todo, Deadline, Event) and date formats
- task_store.py: flat-file storage (pipe-delimited lines)
- task_list.py: the session-owned ordered task collection
"""
