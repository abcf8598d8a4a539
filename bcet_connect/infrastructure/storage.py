"""Azure Blob Storage helpers used to clean up feed media."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import lru_cache

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContainerClient

from bcet_connect.config import get_settings
from bcet_connect.domain.entities import FeedMedia

logger = logging.getLogger(__name__)


class MediaStore:
    """Best-effort deletion of media referenced by feed items."""

    def __init__(self, container_client: ContainerClient | None) -> None:
        self._container = container_client

    def delete_media(self, media: Iterable[FeedMedia]) -> int:
        """Delete every blob referenced by ``media``; return how many were removed.

        Failures are logged and skipped, never raised: a post is soft-deleted
        whether or not its files could be cleaned up.
        """

        blob_names = [item.provider_id for item in media if item.provider_id]
        if not blob_names:
            return 0
        if self._container is None:
            logger.info(
                "Media storage is not configured; skipping cleanup of %d blob(s)",
                len(blob_names),
            )
            return 0

        removed = 0
        for blob_name in blob_names:
            try:
                self._container.get_blob_client(blob_name).delete_blob()
            except ResourceNotFoundError:
                logger.debug("Media blob %s was already gone", blob_name)
            except AzureError as exc:
                logger.warning("Could not delete media blob %s: %s", blob_name, exc)
            else:
                removed += 1
        return removed


def cleanup_media(store: MediaStore, media: Iterable[FeedMedia]) -> None:
    """Run :meth:`MediaStore.delete_media` logging anything that escapes it."""

    try:
        removed = store.delete_media(list(media))
    except Exception:  # noqa: BLE001 - cleanup must never reach the caller
        logger.exception("Unexpected error while cleaning up feed media")
    else:
        if removed:
            logger.info("Removed %d media blob(s) of a deleted post", removed)


@lru_cache
def get_media_store() -> MediaStore:
    """Return the process wide media store built from settings."""

    settings = get_settings()
    if not (
        settings.azure_storage_connection_string and settings.azure_storage_container_name
    ):
        return MediaStore(None)
    service_client = BlobServiceClient.from_connection_string(
        settings.azure_storage_connection_string
    )
    return MediaStore(
        service_client.get_container_client(settings.azure_storage_container_name)
    )


__all__ = ["MediaStore", "cleanup_media", "get_media_store"]
