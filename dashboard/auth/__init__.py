"""
Authentication for the invoicing dashboard.

- credentials: email/password sign-in through Supabase Auth
- dependencies: FastAPI dependency that verifies the session token
"""
