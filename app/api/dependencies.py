"""FastAPI providers for the integration's collaborators; tests override these."""
from fastapi import Depends

from app.core.ghl import GHLClient
from app.core.media import MediaUploader
from app.core.oauth import TokenExchangeClient
from app.core.sync import CustomValueSynchronizer
from app.db.installations import InstallationStore, installation_store


def get_installation_store() -> InstallationStore:
    return installation_store


def get_token_client() -> TokenExchangeClient:
    return TokenExchangeClient()


def get_ghl_client(store: InstallationStore = Depends(get_installation_store)) -> GHLClient:
    return GHLClient(store)


def get_synchronizer(
    store: InstallationStore = Depends(get_installation_store),
    client: GHLClient = Depends(get_ghl_client),
) -> CustomValueSynchronizer:
    return CustomValueSynchronizer(store, client)


def get_media_uploader() -> MediaUploader:
    return MediaUploader()
