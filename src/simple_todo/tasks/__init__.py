"""
Task subsystem.

Components:
- task_models.py: Task dataclass + JSON wire format
- reminder_time.py: "next upcoming HH:MM" resolution
- task_store.py: ordered task list with display-order view (the core)
- task_persistence.py: persistence port over a key-value store
- reminder_scheduler.py: in-process reminder table + async delivery loop
- task_api.py: small high-level helpers used at startup
"""
