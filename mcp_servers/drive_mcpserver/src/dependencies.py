from fastmcp.server.dependencies import get_http_headers

from shared.auth.credentials import CredentialContext, GoogleConfig, resolve_google_config


def get_credential_context() -> CredentialContext:
    return CredentialContext.from_headers(get_http_headers(include_all=True))


def get_drive_config() -> GoogleConfig:
    return resolve_google_config(get_credential_context(), "Google Drive")
