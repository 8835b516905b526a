# Database package: engine/session setup and ORM models
