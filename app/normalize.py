# file: app/normalize.py
import json
import logging
from typing import Any, Dict, List

from app.domain_models import Err, ErrorKind, Ok, Result

log = logging.getLogger("normalize")

COMPANY_INFO_LIST_FIELDS = (
    "products_services",
    "geographic_focus",
    "value_propositions",
    "pain_points_solved",
    "tech_stack",
)

APOLLO_FILTER_LIST_FIELDS = (
    "person_titles",
    "person_seniorities",
    "person_locations",
    "organization_num_employees_ranges",
    "q_keywords",
    "person_not_titles",
)

class NormalizationError(ValueError):
    pass

def normalize_to_array(value: Any) -> List[Any]:
    """Coerce a comma-separated string into a list of trimmed, non-empty items.

    Lists pass through untouched; anything else becomes an empty list.
    """
    if not value:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return []

def normalize_leads(leads: Any) -> List[Any]:
    """Coerce the `leads` field into a list of lead records"""
    if isinstance(leads, list):
        return leads
    if isinstance(leads, dict):
        return [leads]
    if not leads:
        return []
    if isinstance(leads, str):
        # Make.com sometimes sends `{...},{...}` without the brackets
        try:
            return json.loads(f"[{leads}]")
        except (ValueError, RecursionError) as e:
            log.error("Failed to parse leads string: %s", e)
            return []
    return []

def _normalize_section(body: Dict[str, Any], key: str, fields) -> None:
    section = body.get(key)
    # an empty object still gets every list field filled in
    if not section and not isinstance(section, dict):
        return
    if not isinstance(section, dict):
        raise NormalizationError(f"{key} must be an object, got {type(section).__name__}")
    body[key] = {
        **section,
        **{name: normalize_to_array(section.get(name)) for name in fields},
    }

def normalize_request_body(body: Any) -> Result[Dict[str, Any]]:
    """Normalize an inbound save-results body in place.

    Returns Ok(body) or Err(NORMALIZATION) describing what could not be coerced.
    """
    try:
        if not isinstance(body, dict):
            raise NormalizationError(f"request body must be a JSON object, got {type(body).__name__}")

        _normalize_section(body, "company_info", COMPANY_INFO_LIST_FIELDS)
        _normalize_section(body, "apollo_filters", APOLLO_FILTER_LIST_FIELDS)

        leads = normalize_leads(body.get("leads"))
        for i, lead in enumerate(leads):
            if not isinstance(lead, dict):
                raise NormalizationError(f"lead #{i} must be an object, got {type(lead).__name__}")
        body["leads"] = leads
    except Exception as e:
        log.error("Error normalizing request body: %s", e)
        return Err(ErrorKind.NORMALIZATION, f"Failed to normalize request data: {e}")

    return Ok(body)
