"""
Life RPG services package.

Pure rules:
- progression: XP, level, attribute points, rank and achievements
- daily_reset: calendar-day reset of daily missions
- mission_catalog: missions granted at registration

Workflows (own their database transactions):
- account_service: registration, login, logout, session resolution
- mission_service: listing, completion, login-time daily reset
- character_service: profile projection, attribute allocation
- user_locks: per-user serialization of progression writes
"""
