# file: tests/fakes.py
import itertools
from typing import Any, Dict, List, Optional

class InMemoryStore:
    """Dict-backed stand-in for DocumentStore with the same async surface"""

    def __init__(self, fail_on: Optional[str] = None):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {
            "company_info": {},
            "leads": {},
            "submissions": {},
        }
        self.fail_on = fail_on
        self._ids = itertools.count(1)

    def _maybe_fail(self, op: str):
        if self.fail_on == op:
            raise RuntimeError(f"{op} failed: deadline exceeded")

    def _new_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    async def add_company_info(self, data: Dict[str, Any]) -> str:
        self._maybe_fail("add_company_info")
        doc_id = self._new_id("ci")
        self.collections["company_info"][doc_id] = dict(data)
        return doc_id

    async def add_leads(self, leads: List[Dict[str, Any]]) -> int:
        self._maybe_fail("add_leads")
        for lead in leads:
            self.collections["leads"][self._new_id("lead")] = dict(lead)
        return len(leads)

    async def get_submission(self, submission_id: str):
        self._maybe_fail("get_submission")
        doc = self.collections["submissions"].get(submission_id)
        return dict(doc) if doc is not None else None

    async def update_submission(self, submission_id: str, fields: Dict[str, Any]) -> None:
        self._maybe_fail("update_submission")
        if submission_id not in self.collections["submissions"]:
            raise KeyError(f"No document to update: submissions/{submission_id}")
        self.collections["submissions"][submission_id].update(dict(fields))

    async def create_submission(self, submission_id: str, data: Dict[str, Any]) -> None:
        self._maybe_fail("create_submission")
        self.collections["submissions"][submission_id] = dict(data)
