"""
task_service tests

Covers the task service API end to end through FastAPI's TestClient:

- registration, login and bearer-token checks (`test_auth.py`)
- password hashing, token signing and settings (`test_security.py`)
- public and per-user task CRUD (`test_tasks.py`, `test_owned_tasks.py`)
- role-gated routes (`test_roles.py`)
- app wiring, profile and health endpoints (`test_app.py`)
- the plain-text stdlib server (`test_raw_server.py`)

MongoDB is replaced by mongomock-motor, so no database server is needed.
"""
