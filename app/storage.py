# app/storage.py
"""
Blob storage for uploaded avatar images.

The member service talks to a :class:`BlobStore`; the application keeps one
instance in ``app.extensions['blob_store']``. The default backend writes
files under ``UPLOAD_FOLDER`` and serves them from ``BLOB_BASE_URL``.
"""

import logging
import os
import uuid

from werkzeug.utils import secure_filename

from app.errors import StorageFailure

logger = logging.getLogger(__name__)


class BlobStore:
    """Interface for avatar storage backends."""

    def put(self, filename, stream, content_type=None):
        """Store ``stream`` under a name derived from ``filename``.

        Returns:
            Public URL of the stored blob.

        Raises:
            StorageFailure: the backend could not store the blob.
        """
        raise NotImplementedError


def blob_key(filename, prefix='avatars'):
    """Unique storage key for an upload; keeps a sanitized original name."""
    name = secure_filename(filename or '') or 'avatar'
    return f"{prefix}/{uuid.uuid4().hex}-{name}"


class LocalBlobStore(BlobStore):
    """Stores blobs as files below ``root`` and returns ``base_url/<key>``."""

    def __init__(self, root, base_url='/uploads'):
        self.root = root
        self.base_url = base_url.rstrip('/')

    def path_for(self, key):
        return os.path.join(self.root, *key.split('/'))

    def put(self, filename, stream, content_type=None):
        key = blob_key(filename)
        path = self.path_for(key)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, 'wb') as fh:
                while True:
                    chunk = stream.read(64 * 1024)
                    if not chunk:
                        break
                    fh.write(chunk)
        except OSError as exc:
            logger.exception('Failed to store blob %s', key)
            raise StorageFailure('Failed to upload avatar') from exc
        logger.info('Stored blob %s (%s)', key, content_type or 'unknown type')
        return f"{self.base_url}/{key}"


def init_blob_store(app):
    """Create the configured blob store and register it on the app."""
    store = LocalBlobStore(
        app.config['UPLOAD_FOLDER'],
        app.config.get('BLOB_BASE_URL', '/uploads'),
    )
    app.extensions['blob_store'] = store
    return store
