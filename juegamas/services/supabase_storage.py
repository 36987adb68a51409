# juegamas/services/supabase_storage.py
import logging
import time
import uuid
from typing import Optional

from fastapi import HTTPException, UploadFile
from supabase import Client, create_client

from juegamas.config import settings

logger = logging.getLogger(__name__)

BUCKET_RECINTOS = "recintos"
BUCKET_AVATARES = "avatares"

ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}

class SupabaseStorage:
    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        # Usar SERVICE KEY para escritura
        if self._client is None:
            self._client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        return self._client

    async def upload_image(
        self,
        file: UploadFile,
        bucket: str = BUCKET_RECINTOS,
        folder: str = "espacios",
        filename: Optional[str] = None,
        max_size_mb: int = 5,
    ) -> str:
        """Sube imagen y retorna URL pública"""
        if not (file.content_type or "").startswith("image/"):
            raise HTTPException(status_code=400, detail="El archivo debe ser una imagen")

        content = await file.read()
        if len(content) > max_size_mb * 1024 * 1024:
            raise HTTPException(
                status_code=400,
                detail=f"La imagen no debe exceder los {max_size_mb}MB"
            )

        original = file.filename or "image"
        ext = original.rsplit(".", 1)[-1].lower() if "." in original else ""
        if ext not in ALLOWED_EXTENSIONS:
            raise HTTPException(
                status_code=400,
                detail="Tipo de archivo no permitido. Use PNG, JPG, JPEG, GIF o WEBP"
            )

        if filename is None:
            filename = f"img_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"
        storage_path = f"{folder}/{filename}.{ext}" if folder else f"{filename}.{ext}"

        try:
            self.client.storage.from_(bucket).upload(
                storage_path,
                content,
                {"content-type": file.content_type, "cache-control": "3600", "upsert": "false"}
            )
            return self.client.storage.from_(bucket).get_public_url(storage_path)
        except Exception as e:
            logger.exception("Error al subir imagen a %s/%s", bucket, storage_path)
            raise HTTPException(status_code=500, detail=f"Error al subir imagen: {str(e)}")

    def delete_image(self, url: str, bucket: str = BUCKET_RECINTOS) -> bool:
        """Elimina la imagen a partir de su URL pública"""
        try:
            base_url = self.client.storage.from_(bucket).get_public_url("")
            path = url.replace(base_url, "", 1).lstrip("/").split("?", 1)[0]
            self.client.storage.from_(bucket).remove([path])
            return True
        except Exception:
            logger.exception("Error al eliminar imagen %s", url)
            return False

# Instancia global (el cliente se crea en el primer uso)
storage_service = SupabaseStorage()

def get_storage() -> SupabaseStorage:
    return storage_service
