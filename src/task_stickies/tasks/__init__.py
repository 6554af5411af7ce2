"""
Task subsystem.

Components:
- task_models.py: data structures (TaskNode, NotesFile, ProjectSettings, FilterStatus)
- tree.py: pre-order lookup and ancestry-preserving filtering
- render.py: human-readable text for projects, task lists and task details
- task_api.py: the operations exposed to agents and the console
"""
