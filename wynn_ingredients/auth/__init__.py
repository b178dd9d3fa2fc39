"""
Admin authentication for the catalog API.

Responsibilities:
- Seed the admin account from the environment.
- Verify login credentials against bcrypt hashes.
- Guard admin-only endpoints through the session.
"""
