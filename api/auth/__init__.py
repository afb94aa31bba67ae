"""User accounts, JWT access tokens and route guards."""
