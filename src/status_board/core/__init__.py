"""
Core (no I/O).

Components:
- models.py: StatusDocument / Task / ScheduleEntry and their JSON mapping
- commands.py: one Command variant per subcommand + the mutators that apply them
- ports.py: Protocols for the primary document store and the mirror
- clock.py: timestamp source used for updated_at / started_at
"""
