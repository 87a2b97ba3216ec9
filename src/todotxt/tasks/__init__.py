"""
Task subsystem.

Components:
- task_models.py: the Task record and priority/date helpers
- task_parser.py: todo.txt line <-> Task conversion
- task_store.py: file-backed ordered store with dense ids
- task_query.py: sorting, due-date windows and grouping
"""
