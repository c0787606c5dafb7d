"""Core domain layer: entities, ports and the ledger engine."""
