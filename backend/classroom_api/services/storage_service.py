"""
Client du stockage objet (MinIO / S3 compatible).

Toutes les opérations sont adressées par (bucket, object_key).
Le bucket est créé au premier usage s'il n'existe pas.
"""

import logging
from datetime import timedelta
from typing import BinaryIO, Dict, Iterator, Optional

from minio import Minio
from minio.commonconfig import CopySource

from classroom_api.config import settings

logger = logging.getLogger(__name__)

CHUNK_SIZE = 32 * 1024


class StorageService:
    def __init__(self, client: Minio):
        self.client = client
        self._known_buckets = set()

    def ensure_bucket(self, bucket: str) -> None:
        if bucket in self._known_buckets:
            return
        if not self.client.bucket_exists(bucket):
            self.client.make_bucket(bucket)
            logger.info("Bucket %s créé", bucket)
        self._known_buckets.add(bucket)

    def upload(
        self,
        bucket: str,
        object_key: str,
        data: BinaryIO,
        length: int,
        content_type: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> None:
        self.ensure_bucket(bucket)
        self.client.put_object(
            bucket,
            object_key,
            data,
            length,
            content_type=content_type or "application/octet-stream",
            metadata=metadata,
        )
        logger.info("Objet %s/%s envoyé (%d octets)", bucket, object_key, length)

    def download(self, bucket: str, object_key: str) -> Iterator[bytes]:
        """
        Ouvre l'objet immédiatement (un objet absent lève S3Error avant toute réponse),
        puis renvoie un itérateur par blocs qui libère la connexion en fin de lecture.
        """
        response = self.client.get_object(bucket, object_key)

        def iter_chunks() -> Iterator[bytes]:
            try:
                for chunk in response.stream(CHUNK_SIZE):
                    yield chunk
            finally:
                response.close()
                response.release_conn()

        return iter_chunks()

    def presigned_url(self, bucket: str, object_key: str, expiry_seconds: int = 3600) -> str:
        return self.client.presigned_get_object(
            bucket, object_key, expires=timedelta(seconds=expiry_seconds)
        )

    def delete(self, bucket: str, object_key: str) -> None:
        self.client.remove_object(bucket, object_key)
        logger.info("Objet %s/%s supprimé", bucket, object_key)

    def move(self, bucket: str, source_key: str, target_key: str) -> None:
        """Copie l'objet sous sa nouvelle clé puis supprime l'ancienne."""
        self.client.copy_object(bucket, target_key, CopySource(bucket, source_key))
        self.client.remove_object(bucket, source_key)
        logger.info("Objet %s/%s déplacé vers %s", bucket, source_key, target_key)

    def stat(self, bucket: str, object_key: str):
        return self.client.stat_object(bucket, object_key)


_storage_instance: Optional[StorageService] = None


def get_storage() -> StorageService:
    """Dépendance FastAPI: client de stockage partagé, créé à la première demande."""
    global _storage_instance
    if _storage_instance is None:
        client = Minio(
            settings.MINIO_ENDPOINT,
            access_key=settings.MINIO_ACCESS_KEY,
            secret_key=settings.MINIO_SECRET_KEY,
            secure=settings.MINIO_SECURE,
            region=settings.MINIO_REGION,
        )
        _storage_instance = StorageService(client)
    return _storage_instance
