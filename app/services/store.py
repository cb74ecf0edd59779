from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.cloud import firestore

from app.config import Settings
from app.credentials import CredentialError, load_service_account

log = logging.getLogger("store")

COMPANY_INFO = "company_info"
LEADS = "leads"
SUBMISSIONS = "submissions"

# Sentinel resolved by Firestore to the commit time of the write
SERVER_TIMESTAMP = firestore.SERVER_TIMESTAMP

class DocumentStore:
    """Thin async wrapper over the three Firestore collections used by the webhook."""

    def __init__(self, client):
        self.client = client

    async def add_company_info(self, data: Dict[str, Any]) -> str:
        _, ref = await self.client.collection(COMPANY_INFO).add(data)
        return ref.id

    async def add_leads(self, leads: List[Dict[str, Any]]) -> int:
        """Write every lead in one batch; all-or-nothing for this step only."""
        if not leads:
            return 0
        batch = self.client.batch()
        collection = self.client.collection(LEADS)
        for lead in leads:
            batch.set(collection.document(), lead)
        await batch.commit()
        return len(leads)

    async def get_submission(self, submission_id: str) -> Optional[Dict[str, Any]]:
        snapshot = await self.client.collection(SUBMISSIONS).document(submission_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    async def update_submission(self, submission_id: str, fields: Dict[str, Any]) -> None:
        await self.client.collection(SUBMISSIONS).document(submission_id).update(fields)

    async def create_submission(self, submission_id: str, data: Dict[str, Any]) -> None:
        await self.client.collection(SUBMISSIONS).document(submission_id).set(data)

def build_store(settings: Settings) -> DocumentStore:
    """Initialize the Firebase app once and return a store bound to its async client.

    Raises CredentialError when no service account can be loaded.
    """
    service_account = load_service_account(settings)
    try:
        app = firebase_admin.get_app()
    except ValueError:
        try:
            cert = credentials.Certificate(service_account)
        except ValueError as e:
            raise CredentialError(f"Invalid Firebase service account: {e}") from e
        app = firebase_admin.initialize_app(cert)
    log.info("Firestore client ready (project=%s)", service_account.get("project_id", "?"))
    return DocumentStore(firestore_async.client(app))
