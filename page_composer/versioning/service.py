"""
Service de versioning — snapshot à l'enregistrement, restauration dans la session.

save    : écrit la page et une nouvelle Version (numéro = max + 1) en une seule opération
restore : recharge le contenu d'une version dans la session, comme une
          édition annulable ; la liste des versions n'est pas modifiée
"""
import logging
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from ..persistence.base import PageNotFound, PageRepository
from .models import Version, VersionMetadata

if TYPE_CHECKING:
    from ..editor.session import EditorSession

log = logging.getLogger(__name__)


class VersioningService:
    def __init__(self, repository: PageRepository):
        self.repository = repository

    def next_version_number(self, page_id: str) -> int:
        versions = self.repository.list_versions(page_id)
        return max((v.version_number for v in versions), default=0) + 1

    def save(
        self,
        page_id: str,
        session: "EditorSession",
        metadata: Optional[VersionMetadata] = None,
        change_summary: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Version:
        """
        Enregistre l'état de la session. La session n'est jamais modifiée :
        en cas de PersistenceError les éditions restent en mémoire et
        l'opération peut être relancée.
        """
        record = self.repository.get_page(page_id)
        if record is None:
            raise PageNotFound(page_id)

        now = now or datetime.utcnow()
        snapshot = session.snapshot()
        meta = metadata or VersionMetadata(
            title=record.title,
            slug=record.slug,
            seo_title=record.seo_title,
            seo_description=record.seo_description,
        )

        version = Version(
            version_number=self.next_version_number(page_id),
            content=snapshot,
            metadata=meta,
            change_summary=change_summary,
            created_at=now,
            is_published=record.status == "published",
        )
        # Page et version écrites ensemble : pas de contenu enregistré sans version
        self.repository.save_version(page_id, snapshot.to_wire(), now, version, **meta.model_dump())
        log.info("Page %s enregistrée — version %s (%s blocs)", page_id, version.version_number, version.block_count)
        return version

    def list_versions(self, page_id: str) -> List[Version]:
        """Versions de la plus récente à la plus ancienne."""
        return sorted(self.repository.list_versions(page_id), key=lambda v: v.version_number, reverse=True)

    def get_version(self, page_id: str, version_number: int) -> Optional[Version]:
        return self.repository.get_version(page_id, version_number)

    @staticmethod
    def restore(session: "EditorSession", version: Version) -> None:
        """Remplace blocs et thème de la session par ceux de la version (annulable)."""
        session.load_snapshot(version.content)
        log.info("Version %s restaurée (%s blocs)", version.version_number, version.block_count)
