"""Security primitives: JWT access tokens, refresh tokens, password hashing."""
