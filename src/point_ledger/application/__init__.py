"""Application layer - Services and port definitions.

This layer contains:
- Services: PointService, the single entry point for balance mutations and reads
- Ports: Abstract interfaces for locking, storage, and time

The application layer depends only on the domain layer.
Infrastructure implementations are injected via ports.
"""
