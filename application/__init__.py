"""
Application Layer for the workout session engine.

This package contains:
- ports/: Abstract interfaces for stores and collaborators
- session/: The session runtime state machine, its ticker and registry
- errors.py: Error taxonomy shared by the runtime and adapters
"""
