from __future__ import annotations
import json
import logging

from app.domain_models import Err, ErrorKind, IngestOutcome, Ok, Result
from app.schema import SaveResultsRequest
from app.services.store import SERVER_TIMESTAMP

log = logging.getLogger("ingestion")

class Ingestor:
    """Persists one save-results payload: company info, its leads, then the submission status.

    The three writes are independent; a failure after the first leaves the
    company_info document in place.
    """

    def __init__(self, store):
        self.store = store

    async def save_results(self, request: SaveResultsRequest) -> Result[IngestOutcome]:
        if log.isEnabledFor(logging.DEBUG):
            log.debug("Normalized company_info: %s", json.dumps(request.company_info, indent=2, default=str))
            log.debug("Normalized apollo_filters: %s", json.dumps(request.apollo_filters, indent=2, default=str))
            log.debug("Normalized leads count: %d", len(request.leads))

        try:
            company_info_id = await self.store.add_company_info({
                **request.company_info,
                "apollo_filters": request.apollo_filters,
                "user_id": request.user_id,
                "submission_id": request.submission_id,
                "created_at": SERVER_TIMESTAMP,
            })
            log.info("Created company_info doc: %s", company_info_id)

            leads_saved = 0
            if request.leads:
                leads_saved = await self.store.add_leads([
                    {
                        **lead,
                        "user_id": request.user_id,
                        "submission_id": request.submission_id,
                        "company_info_id": company_info_id,
                        "status": "new",
                        "created_at": SERVER_TIMESTAMP,
                    }
                    for lead in request.leads
                ])
                log.info("Created %d lead documents", leads_saved)

            created = await self._complete_submission(request, company_info_id, leads_saved)
        except Exception as e:
            log.exception("Error saving results for submission %s", request.submission_id)
            return Err(ErrorKind.PERSISTENCE, str(e))

        return Ok(IngestOutcome(
            company_info_id=company_info_id,
            leads_saved=leads_saved,
            submission_created=created,
        ))

    async def _complete_submission(self, request: SaveResultsRequest, company_info_id: str, total_leads: int) -> bool:
        """Mark the submission completed, creating it if the caller never registered it.

        Read-then-write with no concurrency check: parallel calls for the same
        submission_id race and the last write wins.
        """
        existing = await self.store.get_submission(request.submission_id)
        if existing is not None:
            await self.store.update_submission(request.submission_id, {
                "status": "completed",
                "company_info_id": company_info_id,
                "total_leads": total_leads,
                "completed_at": SERVER_TIMESTAMP,
            })
            log.info("Updated submission %s to completed", request.submission_id)
            return False

        await self.store.create_submission(request.submission_id, {
            "user_id": request.user_id,
            "user_email": request.user_email,
            "user_name": request.user_name,
            "submission_type": "webhook",
            "status": "completed",
            "company_info_id": company_info_id,
            "total_leads": total_leads,
            "created_at": SERVER_TIMESTAMP,
            "completed_at": SERVER_TIMESTAMP,
        })
        log.info("Created new submission %s as completed", request.submission_id)
        return True
