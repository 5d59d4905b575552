"""Domain layer - Core business logic, entities, and rules.

This layer contains:
- Entities: UserPoint (current balance) and PointHistory (audit record)
- Domain Exceptions: Business rule violations (amount, ceiling, funds)

The domain layer has NO dependencies on external frameworks or infrastructure.
"""
