"""Services Layer — SQL repositories, party resolution, ACH submission, and transfer orchestration.

Invariants:
    - Repositories never commit; the caller owns the transaction
    - Every query is scoped by user_id
"""
