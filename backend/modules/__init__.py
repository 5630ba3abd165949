"""
Feature modules for the Eros identity backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- exceptions.py: Module-specific exceptions
- a service implementation, plus routes.py where the module has endpoints

Modules communicate through interfaces, not concrete implementations.
"""
