"""KinKeep Source Package.

Keeps track of who is due for a check-in, and how urgently.

Layers:
    - core: Configuration, logging, exceptions
    - db: Contact and template records
    - engine: Scheduling and prioritization (birthdays, cadence, scoring)
"""

__version__ = "0.1.0"
