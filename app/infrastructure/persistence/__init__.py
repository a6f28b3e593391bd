"""SQL persistence: engine/session management, ORM models, repositories."""
