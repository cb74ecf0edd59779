import json
import pytest
from app.config import Settings
from app.credentials import CredentialError, load_service_account

SERVICE_ACCOUNT = {
    "type": "service_account",
    "project_id": "leads-test",
    "client_email": "svc@leads-test.iam.gserviceaccount.com",
}

def test_env_var_takes_priority(tmp_path):
    missing = tmp_path / "nope.json"
    settings = Settings(service_account_json=json.dumps(SERVICE_ACCOUNT), service_account_file=str(missing))

    assert load_service_account(settings) == SERVICE_ACCOUNT

def test_falls_back_to_local_file(tmp_path):
    path = tmp_path / "service-account.json"
    path.write_text(json.dumps(SERVICE_ACCOUNT), encoding="utf-8")
    settings = Settings(service_account_json=None, service_account_file=str(path))

    assert load_service_account(settings)["project_id"] == "leads-test"

def test_unparseable_env_var(tmp_path):
    settings = Settings(service_account_json="{oops", service_account_file=str(tmp_path / "x.json"))

    with pytest.raises(CredentialError, match="Failed to parse FIREBASE_SERVICE_ACCOUNT"):
        load_service_account(settings)

def test_missing_file(tmp_path):
    settings = Settings(service_account_json=None, service_account_file=str(tmp_path / "missing.json"))

    with pytest.raises(CredentialError, match="Failed to load Firebase credentials"):
        load_service_account(settings)

def test_non_object_credentials_rejected():
    settings = Settings(service_account_json='["not", "a", "dict"]')

    with pytest.raises(CredentialError, match="must be a JSON object"):
        load_service_account(settings)
