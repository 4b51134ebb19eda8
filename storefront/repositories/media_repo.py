"""
Repository pour la collection partagée œuvres / slider / vidéos.
Deux implémentations avec la même interface :
- MediaRepository : collection MongoDB (pymongo)
- InMemoryMediaRepository : dictionnaire en mémoire (tests, dev sans MongoDB)
"""

from typing import Optional, List, Dict
import copy
import uuid
from bson import ObjectId
import logging

logger = logging.getLogger(__name__)


def _serialize(raw: Dict) -> Dict:
    doc = dict(raw)
    doc["id"] = str(doc.pop("_id"))
    return doc


def _to_object_id(doc_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(doc_id)
    except Exception:
        return None


class MediaRepository:
    """Accès MongoDB à la collection partagée"""

    def __init__(self, collection):
        self.collection = collection

    def insert(self, data: Dict) -> str:
        """Insère un document et retourne son _id sous forme de chaîne"""
        data = dict(data)
        data.pop("_id", None)
        data.pop("id", None)
        result = self.collection.insert_one(data)
        return str(result.inserted_id)

    def get(self, doc_id: str) -> Optional[Dict]:
        oid = _to_object_id(doc_id)
        if oid is None:
            return None
        raw = self.collection.find_one({"_id": oid})
        return _serialize(raw) if raw else None

    def find(self, filters: Dict) -> List[Dict]:
        """Requête par égalité, sans tri (pas d'index composite requis)"""
        return [_serialize(raw) for raw in self.collection.find(filters)]

    def count(self, filters: Dict) -> int:
        return self.collection.count_documents(filters)

    def update(self, doc_id: str, fields: Dict) -> bool:
        """
        Fusionne les champs dans le document existant.
        Retourne True si le document existe.
        """
        oid = _to_object_id(doc_id)
        if oid is None:
            return False
        fields = dict(fields)
        fields.pop("_id", None)
        fields.pop("id", None)
        result = self.collection.update_one({"_id": oid}, {"$set": fields})
        return result.matched_count > 0

    def delete(self, doc_id: str) -> bool:
        oid = _to_object_id(doc_id)
        if oid is None:
            return False
        result = self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0


class InMemoryMediaRepository:
    """Même interface que MediaRepository, stockage en mémoire du processus"""

    def __init__(self):
        self.documents: Dict[str, Dict] = {}

    def insert(self, data: Dict) -> str:
        doc_id = uuid.uuid4().hex
        data = copy.deepcopy(data)
        data.pop("_id", None)
        data["id"] = doc_id
        self.documents[doc_id] = data
        return doc_id

    def get(self, doc_id: str) -> Optional[Dict]:
        doc = self.documents.get(doc_id)
        return copy.deepcopy(doc) if doc else None

    def find(self, filters: Dict) -> List[Dict]:
        return [
            copy.deepcopy(doc)
            for doc in self.documents.values()
            if all(doc.get(key) == value for key, value in filters.items())
        ]

    def count(self, filters: Dict) -> int:
        return len(self.find(filters))

    def update(self, doc_id: str, fields: Dict) -> bool:
        doc = self.documents.get(doc_id)
        if doc is None:
            return False
        fields = copy.deepcopy(fields)
        fields.pop("_id", None)
        fields.pop("id", None)
        doc.update(fields)
        return True

    def delete(self, doc_id: str) -> bool:
        return self.documents.pop(doc_id, None) is not None
