from shared.config import settings
from .services.remote_client import RemoteToolClient

# One connection to the call-placement server, shared by every tool call
remote_client = RemoteToolClient(settings.CALL_SERVICE_URL)


def get_remote_client() -> RemoteToolClient:
    return remote_client
