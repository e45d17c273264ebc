from __future__ import annotations
from typing import Any, BinaryIO, Dict, Optional
import hashlib, logging, os, re, time

import httpx

from .exceptions import InvalidImageError, MediaStoreError
from .schemas import MediaAsset

logger = logging.getLogger(__name__)

API_BASE = "https://api.cloudinary.com/v1_1"
IMAGE_FILENAME = re.compile(r"\.(jpg|jpeg|png|gif)$", re.IGNORECASE)


def ensure_image(filename: Optional[str]) -> None:
    if not filename or not IMAGE_FILENAME.search(filename):
        raise InvalidImageError("Only image files are allowed!")


def sign(params: Dict[str, Any], api_secret: str) -> str:
    """Cloudinary signature: sha1 of the sorted ``k=v`` pairs joined by ``&`` plus the secret."""
    payload = "&".join(f"{k}={params[k]}" for k in sorted(params) if params[k] not in (None, ""))
    return hashlib.sha1((payload + api_secret).encode()).hexdigest()


class MediaStore:
    """Interface the campground service relies on."""

    def upload(self, fileobj: BinaryIO, filename: str) -> MediaAsset:
        raise NotImplementedError

    def destroy(self, public_id: str) -> None:
        raise NotImplementedError


class CloudinaryMediaStore(MediaStore):
    def __init__(self, cloud_name: str, api_key: Optional[str], api_secret: Optional[str],
                 timeout: float = 30.0, client: Optional[httpx.Client] = None):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self._client = client or httpx.Client(timeout=timeout)

    def _url(self, action: str) -> str:
        return f"{API_BASE}/{self.cloud_name}/image/{action}"

    def _signed(self, params: Dict[str, Any]) -> Dict[str, Any]:
        if not self.api_key or not self.api_secret:
            raise MediaStoreError("Cloudinary credentials missing (check .env)")
        params = dict(params, timestamp=int(time.time()))
        params["signature"] = sign(params, self.api_secret)
        params["api_key"] = self.api_key
        return params

    def _post(self, action: str, data: Dict[str, Any], files=None) -> Dict[str, Any]:
        try:
            resp = self._client.post(self._url(action), data=data, files=files)
        except httpx.HTTPError as e:
            raise MediaStoreError(f"Media host unreachable: {e}") from e
        try:
            payload = resp.json()
        except ValueError:
            payload = {}
        if resp.status_code != 200:
            msg = (payload.get("error") or {}).get("message") or resp.text or f"HTTP {resp.status_code}"
            raise MediaStoreError(msg)
        return payload

    def upload(self, fileobj: BinaryIO, filename: str) -> MediaAsset:
        # prefix with a timestamp so repeated filenames stay distinct
        name = f"{int(time.time() * 1000)}{os.path.basename(filename)}"
        payload = self._post("upload", self._signed({}), files={"file": (name, fileobj)})
        try:
            asset = MediaAsset(secure_url=payload["secure_url"], public_id=payload["public_id"])
        except KeyError as e:
            raise MediaStoreError(f"Unexpected upload response, missing {e}") from e
        logger.info(f"Uploaded image {asset.public_id}")
        return asset

    def destroy(self, public_id: str) -> None:
        payload = self._post("destroy", self._signed({"public_id": public_id}))
        result = payload.get("result")
        if result == "not found":
            logger.warning(f"Image {public_id} was already gone on the media host")
        elif result != "ok":
            raise MediaStoreError(f"Could not delete image {public_id}: {result}")
        else:
            logger.info(f"Destroyed image {public_id}")
