"""Application layer: request/response DTOs, use cases and command dispatch."""
