"""
Repository des comptes admin (authentification email / mot de passe).
"""

from typing import Optional, Dict
from datetime import datetime
import copy
import uuid
import logging

logger = logging.getLogger(__name__)


class AdminRepository:
    """Comptes admin dans MongoDB"""

    def __init__(self, collection):
        self.collection = collection

    def get_by_email(self, email: str) -> Optional[Dict]:
        raw = self.collection.find_one({"email": email.lower()})
        if not raw:
            return None
        raw["id"] = str(raw.pop("_id"))
        return raw

    def create(self, email: str, hashed_password: str) -> str:
        if self.get_by_email(email):
            raise ValueError("An account with this email already exists")
        result = self.collection.insert_one({
            "email": email.lower(),
            "hashedPassword": hashed_password,
            "createdAt": datetime.utcnow(),
            "lastLogin": None,
        })
        logger.info(f"✅ Admin account created: {email.lower()}")
        return str(result.inserted_id)

    def update_last_login(self, email: str):
        self.collection.update_one(
            {"email": email.lower()},
            {"$set": {"lastLogin": datetime.utcnow()}}
        )


class InMemoryAdminRepository:

    def __init__(self):
        self.accounts: Dict[str, Dict] = {}

    def get_by_email(self, email: str) -> Optional[Dict]:
        account = self.accounts.get(email.lower())
        return copy.deepcopy(account) if account else None

    def create(self, email: str, hashed_password: str) -> str:
        if self.get_by_email(email):
            raise ValueError("An account with this email already exists")
        account_id = uuid.uuid4().hex
        self.accounts[email.lower()] = {
            "id": account_id,
            "email": email.lower(),
            "hashedPassword": hashed_password,
            "createdAt": datetime.utcnow(),
            "lastLogin": None,
        }
        return account_id

    def update_last_login(self, email: str):
        account = self.accounts.get(email.lower())
        if account:
            account["lastLogin"] = datetime.utcnow()
