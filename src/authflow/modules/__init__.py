"""Business modules for authflow.

Each module is self-contained with its own schemas, services, and domain
logic. The auth module owns credential validation, hashing, token issuance,
and the HTTP endpoints built on top of them.
"""
