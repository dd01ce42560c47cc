"""
Azure Blob Storage uploader.
Keeps downloaded videos in a public container and hands out links.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from azure.core.exceptions import AzureError, ResourceExistsError
from azure.storage.blob.aio import BlobServiceClient, ContainerClient

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the blob store cannot be reached or written to."""


class BlobStorageService:
    """
    Uploads local files to a single flat container with public blob access.
    """

    def __init__(self, connection_string: str, container_name: str):
        """
        Initialize storage service.

        The SDK client is created on first use, so an empty connection
        string only fails when storage is actually touched.

        Args:
            connection_string: Azure Storage connection string
            container_name: Target container
        """
        self.connection_string = connection_string
        self.container_name = container_name
        self._service: Optional[BlobServiceClient] = None
        self._container: Optional[ContainerClient] = None

    @property
    def container(self) -> ContainerClient:
        if self._container is None:
            try:
                self._service = BlobServiceClient.from_connection_string(
                    self.connection_string
                )
            except (ValueError, AzureError) as e:
                raise StorageError(f"Invalid storage connection string: {e}") from e
            self._container = self._service.get_container_client(self.container_name)
        return self._container

    async def ensure_container(self) -> None:
        """
        Create the container with public blob read access if it is missing.
        Safe to call on every startup.
        """
        container = self.container
        try:
            await container.create_container(public_access="blob")
            logger.info(f"Created blob container '{self.container_name}'")
        except ResourceExistsError:
            logger.info(f"Using blob container '{self.container_name}'")
        except AzureError as e:
            raise StorageError(
                f"Could not create container '{self.container_name}': {e}"
            ) from e

    async def upload_file(self, file_path: Union[str, Path], blob_name: str) -> str:
        """
        Stream a local file into the container, replacing any blob of the same name.

        Args:
            file_path: Local file to upload
            blob_name: Name of the blob to write

        Returns:
            Public URL of the uploaded blob
        """
        blob = self.container.get_blob_client(blob_name)
        logger.info(f"Uploading file to blob storage: {file_path} -> {blob_name}")
        try:
            with open(file_path, "rb") as stream:
                await blob.upload_blob(stream, overwrite=True)
        except (AzureError, OSError) as e:
            raise StorageError(f"Upload of {blob_name} failed: {e}") from e

        logger.info(f"Upload complete, file available at: {blob.url}")
        return blob.url

    async def close(self) -> None:
        if self._service is not None:
            await self._service.close()
            self._service = None
            self._container = None
