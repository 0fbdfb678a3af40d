"""
Feature modules for the Prime Portal backend.

- sessions: per-role session store for one browsing context
- identity: Supabase Auth sign-in, sign-up and sign-out
- admin_auth: admin email verification, OTP issue/redeem and the login flow
- portal: browsing context state, role switcher and client sign-in

Each module keeps its Protocol definitions in interfaces.py, Pydantic models
in models.py and module-specific exceptions in exceptions.py.
Modules communicate through interfaces, not concrete implementations.
"""
