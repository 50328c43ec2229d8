"""Core — pure domain logic for transfers.

Invariants:
    - No IO, no async, no DB in this package (repository_protocols only declares async contracts)
    - Errors raised here are PaygateError subclasses from core/errors.py
"""
