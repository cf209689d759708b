"""
CRUD package

Exposes the module-level CRUD objects, so `from app.crud import user`
binds the CRUDUser instance. Reference queries are plain functions in
app.crud.reference.
"""
from app.crud.account import account
from app.crud.transaction import transaction
from app.crud.user import user

__all__ = ["account", "transaction", "user"]
