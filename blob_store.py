# blob_store.py
"""
Azure Blob Storage adapter.

Clients upload images straight to a short-lived SAS URL; the backend only
keeps the blob name (storage_id) and hands out read URLs on demand.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import BlobSasPermissions, BlobServiceClient, generate_blob_sas

from config import (
     AZURE_STORAGE_ACCOUNT,
     AZURE_STORAGE_CONTAINER,
     AZURE_STORAGE_KEY,
     UPLOAD_URL_TTL_MINUTES,
)
from services.errors import BlobStoreError

logger = logging.getLogger("handover.blob_store")

READ_URL_TTL = timedelta(hours=1)


class AzureBlobStore:
     """Blob store backed by one Azure Storage container."""

     def __init__(self, account: str, key: str, container: str):
          self.account = account
          self.key = key
          self.container = container
          self.service = BlobServiceClient.from_connection_string(
               f"DefaultEndpointsProtocol=https;"
               f"AccountName={account};"
               f"AccountKey={key};"
               f"EndpointSuffix=core.windows.net"
          )

     def _blob_url(self, storage_id: str, sas: str) -> str:
          return f"https://{self.account}.blob.core.windows.net/{self.container}/{storage_id}?{sas}"

     def _sas(self, storage_id: str, permission: BlobSasPermissions, ttl: timedelta) -> str:
          return generate_blob_sas(
               account_name=self.account,
               container_name=self.container,
               blob_name=storage_id,
               account_key=self.key,
               permission=permission,
               expiry=datetime.now(timezone.utc) + ttl,
          )

     def request_upload_target(self) -> dict:
          """
          Reserve a new blob name and return a write-once upload URL for it.

          The SAS only grants "create", so the URL cannot overwrite an
          existing blob.
          """
          storage_id = f"{uuid.uuid4()}"
          ttl = timedelta(minutes=UPLOAD_URL_TTL_MINUTES)
          sas = self._sas(storage_id, BlobSasPermissions(create=True), ttl)
          return {
               "storage_id": storage_id,
               "upload_url": self._blob_url(storage_id, sas),
               "expires_at": datetime.now(timezone.utc) + ttl,
          }

     def resolve_url(self, storage_id: str) -> Optional[str]:
          """Readable URL for a blob, or None when it does not exist."""
          blob_client = self.service.get_blob_client(container=self.container, blob=storage_id)
          try:
               if not blob_client.exists():
                    return None
          except AzureError:
               logger.warning("Could not resolve blob %s", storage_id, exc_info=True)
               return None
          sas = self._sas(storage_id, BlobSasPermissions(read=True), READ_URL_TTL)
          return self._blob_url(storage_id, sas)

     def delete(self, storage_id: str) -> None:
          """
          Delete a blob. A blob that is already gone counts as deleted.

          Raises:
               BlobStoreError: storage rejected the delete
          """
          blob_client = self.service.get_blob_client(container=self.container, blob=storage_id)
          try:
               blob_client.delete_blob()
          except ResourceNotFoundError:
               logger.info("Blob %s already deleted", storage_id)
          except AzureError as e:
               logger.error("Failed to delete blob %s: %s", storage_id, e)
               raise BlobStoreError("Failed to delete image from storage") from e


@lru_cache
def get_blob_store() -> AzureBlobStore:
     """FastAPI dependency returning the process-wide blob store."""
     return AzureBlobStore(AZURE_STORAGE_ACCOUNT, AZURE_STORAGE_KEY, AZURE_STORAGE_CONTAINER)
