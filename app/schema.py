# file: app/schema.py
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from app.domain_models import Err, ErrorKind, Ok, Result

MISSING_REQUIRED = "Missing required fields: submission_id and user_id"

class SaveResultsRequest(BaseModel):
    submission_id: Optional[str] = None
    user_id: Optional[str] = None
    user_email: str = ""
    user_name: str = ""
    company_info: Dict[str, Any] = {}
    apollo_filters: Dict[str, Any] = {}
    leads: List[Dict[str, Any]] = []

    model_config = ConfigDict(extra="ignore")

    @field_validator("submission_id", "user_id", mode="before")
    @classmethod
    def _ids_as_text(cls, v):
        # Firestore document ids are strings; Make.com may send numeric ids.
        # 0 counts as missing, like any other falsy id
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v) if v else None
        return v

    @field_validator("user_email", "user_name", mode="before")
    @classmethod
    def _blank_text(cls, v):
        return v or ""

    @field_validator("company_info", "apollo_filters", mode="before")
    @classmethod
    def _blank_object(cls, v):
        return v or {}

    @field_validator("leads", mode="before")
    @classmethod
    def _blank_list(cls, v):
        return v or []

class SaveResultsResponse(BaseModel):
    success: bool = True
    company_info_id: str
    leads_saved: int

class ErrorResponse(BaseModel):
    success: bool = False
    error: str

class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: str

def parse_save_results(body: Dict[str, Any]) -> Result[SaveResultsRequest]:
    """Validate a normalized body. Returns Ok(SaveResultsRequest) or Err(VALIDATION)."""
    try:
        request = SaveResultsRequest.model_validate(body)
    except ValidationError as e:
        detail = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        return Err(ErrorKind.VALIDATION, f"Invalid request data: {detail}")

    if not request.submission_id or not request.user_id:
        return Err(ErrorKind.VALIDATION, MISSING_REQUIRED)
    return Ok(request)
