"""Process-lifetime container for the injected collaborator handles."""
from __future__ import annotations
from dataclasses import dataclass

from studio_admin.config import AppConfig
from studio_admin.core.cloudinary import AssetHostClient
from studio_admin.core.deprovisioning import DeprovisioningService
from studio_admin.core.firebase import IdentityDirectory, RecordStore, initialize_firebase


@dataclass(frozen=True)
class Services:
    identity: object
    records: object
    assets: object
    folder_template: str = "user/{uid}"

    @property
    def deprovisioning(self) -> DeprovisioningService:
        return DeprovisioningService(self.identity, self.records, self.assets, self.folder_template)


def build_services(cfg: AppConfig) -> Services:
    """Create the real Firebase and Cloudinary clients from configuration.

    Raises:
        ConfigurationError: If Firebase credentials cannot be loaded
    """
    firebase_app = initialize_firebase(cfg.firebase_credentials_file, cfg.firebase_database_url)
    assets = AssetHostClient(
        cfg.cloudinary_cloud_name,
        cfg.cloudinary_api_key,
        cfg.cloudinary_api_secret,
        base_url=cfg.cloudinary_api_base_url,
    )
    return Services(
        identity=IdentityDirectory(firebase_app),
        records=RecordStore(firebase_app),
        assets=assets,
        folder_template=cfg.asset_user_folder_template,
    )
