"""
Contrôleur d'édition — relie la session aux appels de frontière
(chargement, enregistrement, publication, versions, templates, import,
bibliothèque de blocs personnalisés).

Seul le chargement est fatal (PageNotFound remonte à l'appelant). Tout
autre échec de frontière est intercepté ici et converti en Notification ;
la session n'est alors jamais modifiée.
"""
import logging
from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel

from ..blocks import BaseBlock
from ..core.schemas import PageSnapshot
from ..importer.markup import extract_blocks
from ..importer.remote import import_from_url, validate_url
from ..library.models import CustomBlock, search_custom_blocks
from ..persistence.base import (
    CustomBlockNotFound, PageNotFound, PageRecord, PageRepository, PersistenceError,
)
from ..renderer.html import render_page, render_preview
from ..templates.catalog import PageTemplate, TemplateCatalog, select_template
from ..versioning.models import Version, VersionMetadata
from ..versioning.service import VersioningService
from .session import EditorSession

log = logging.getLogger(__name__)

NO_CONTENT_MESSAGE = "No content could be extracted"
BLOCK_NAME_REQUIRED = "Please enter a name for this block"
BLOCK_SAVE_FAILED   = "Failed to save block. Please try again."


class Notification(BaseModel):
    level: Literal["info", "success", "error"] = "info"
    message: str


class PageEditor:
    def __init__(self, repository: PageRepository, page: PageRecord, session: EditorSession):
        self.repository = repository
        self.page = page
        self.session = session
        self.versioning = VersioningService(repository)
        self.metadata = VersionMetadata(
            title=page.title, slug=page.slug,
            seo_title=page.seo_title, seo_description=page.seo_description,
        )
        self.notifications: List[Notification] = []
        self.extracted_image_urls: List[str] = []
        self._saved_wire = session.snapshot().to_wire()

    @classmethod
    def open(cls, repository: PageRepository, page_id: str) -> "PageEditor":
        """Charge la page. Lève PageNotFound si elle n'existe pas."""
        record = repository.get_page(page_id)
        if record is None:
            raise PageNotFound(page_id)
        session = EditorSession.from_snapshot(PageSnapshot.from_wire(record.content))
        log.info("Page %s ouverte (%s blocs)", page_id, len(session.blocks))
        return cls(repository, record, session)

    # ── Notifications ────────────────────────────────────────────────────────

    def notify(self, level: str, message: str) -> None:
        self.notifications.append(Notification(level=level, message=message))

    def pop_notifications(self) -> List[Notification]:
        out, self.notifications = self.notifications, []
        return out

    @property
    def has_unsaved_changes(self) -> bool:
        """Contenu courant (blocs, drapeaux, thème) différent du dernier enregistrement."""
        return self.session.snapshot().to_wire() != self._saved_wire

    # ── Réglages de page ─────────────────────────────────────────────────────

    def update_settings(self, **settings) -> None:
        """title / slug / seo_title / seo_description — appliqués au prochain enregistrement."""
        known = {k: v for k, v in settings.items() if k in VersionMetadata.model_fields}
        self.metadata = self.metadata.model_copy(update=known)

    # ── Enregistrement / publication ─────────────────────────────────────────

    def save(self, change_summary: Optional[str] = None) -> Optional[Version]:
        try:
            version = self.versioning.save(
                self.page.id, self.session, metadata=self.metadata, change_summary=change_summary,
            )
            self.page = self.repository.get_page(self.page.id) or self.page
        except PersistenceError as e:
            log.error("Enregistrement page %s : %s", self.page.id, e)
            self.notify("error", "Failed to save page")
            return None
        self._saved_wire = version.content.to_wire()
        self.notify("success", "Page saved successfully!")
        return version

    def publish(self) -> bool:
        """Publie le dernier contenu enregistré (les éditions non enregistrées ne le sont pas)."""
        try:
            self.page = self.repository.publish_page(self.page.id, datetime.utcnow())
        except PersistenceError as e:
            log.error("Publication page %s : %s", self.page.id, e)
            self.notify("error", "Failed to publish page")
            return False
        if self.has_unsaved_changes:
            self.notify("info", "Unsaved changes are not part of the published page")
        self.notify("success", "Page published successfully!")
        return True

    # ── Versions ─────────────────────────────────────────────────────────────

    def versions(self) -> List[Version]:
        try:
            return self.versioning.list_versions(self.page.id)
        except PersistenceError as e:
            log.error("Versions page %s : %s", self.page.id, e)
            self.notify("error", "Failed to load version history")
            return []

    def restore(self, version_number: int) -> bool:
        """Recharge une version dans la session (annulable) ; ses réglages redeviennent courants."""
        try:
            version = self.versioning.get_version(self.page.id, version_number)
        except PersistenceError as e:
            log.error("Version %s page %s : %s", version_number, self.page.id, e)
            self.notify("error", "Failed to load version")
            return False
        if version is None:
            self.notify("error", f"Version {version_number} not found")
            return False
        self.versioning.restore(self.session, version)
        self.metadata = version.metadata.model_copy()
        self.notify("success", f"Version {version_number} restored")
        return True

    # ── Templates ────────────────────────────────────────────────────────────

    def template_catalog(self) -> TemplateCatalog:
        try:
            return TemplateCatalog(self.repository.list_templates())
        except PersistenceError as e:
            log.error("Templates : %s", e)
            self.notify("error", "Failed to load templates")
            return TemplateCatalog([])

    def apply_template(self, template: PageTemplate) -> None:
        """Remplace la séquence de blocs (et le thème, sauf template vierge)."""
        snapshot = select_template(template, self.session.theme)
        self.session.set_theme(snapshot.theme)
        self.session.replace_blocks(snapshot.blocks)

    # ── Import ───────────────────────────────────────────────────────────────

    def import_markup(self, markup: str, base_url: Optional[str] = None) -> int:
        """Extraction locale ; les blocs sont ajoutés en fin de séquence."""
        result = extract_blocks(markup, base_url)
        if result.empty:
            self.notify("error", NO_CONTENT_MESSAGE)
            return 0
        self.extracted_image_urls = list(result.image_urls)
        count = self.session.append_blocks(result.blocks)
        self.notify("success", f"{count} blocks imported")
        return count

    def import_url(self, url: str) -> int:
        problem = validate_url(url)
        if problem:
            self.notify("error", problem)
            return 0
        result = import_from_url(url)
        if not result.success:
            log.info("Import %s sans résultat : %s", url, result.error)
            self.notify("error", NO_CONTENT_MESSAGE)
            return 0
        count = self.session.append_blocks(result.blocks)
        self.notify("success", f"{count} blocks imported")
        return count

    # ── Bibliothèque de blocs ────────────────────────────────────────────────

    def save_block_to_library(
        self,
        block_id: str,
        name: str,
        description: Optional[str] = None,
        category: Optional[str] = None,
        tags: Any = "",
        is_favorite: bool = False,
    ) -> Optional[CustomBlock]:
        """Enregistre un bloc de la session (type, contenu, styles) pour réutilisation."""
        block = self.session.get(block_id)
        if block is None:
            self.notify("error", f"Block {block_id} not found")
            return None
        if not name.strip():
            self.notify("error", BLOCK_NAME_REQUIRED)
            return None
        custom = CustomBlock.from_block(
            block, name=name, description=description, category=category,
            tags=tags, is_favorite=is_favorite,
        )
        try:
            saved = self.repository.create_custom_block(custom)
        except PersistenceError as e:
            log.error("Enregistrement bloc %s : %s", block_id, e)
            self.notify("error", BLOCK_SAVE_FAILED)
            return None
        self.notify("success", f'Block "{saved.name}" saved to library')
        return saved

    def custom_blocks(
        self, search: str = "", category: str = "all", sort: str = "recent", favorites_only: bool = False,
    ) -> List[CustomBlock]:
        try:
            blocks = self.repository.list_custom_blocks()
        except PersistenceError as e:
            log.error("Bibliothèque de blocs : %s", e)
            self.notify("error", "Failed to load custom blocks")
            return []
        return search_custom_blocks(blocks, search=search, category=category, sort=sort,
                                    favorites_only=favorites_only)

    def use_custom_block(self, custom_block_id: str) -> Optional[BaseBlock]:
        """Insère une copie du bloc enregistré ; le compteur d'usage n'est pas bloquant."""
        try:
            custom = self.repository.get_custom_block(custom_block_id)
        except PersistenceError as e:
            log.error("Bloc personnalisé %s : %s", custom_block_id, e)
            self.notify("error", "Failed to load custom blocks")
            return None
        if custom is None:
            self.notify("error", "Custom block not found")
            return None
        try:
            custom = self.repository.increment_custom_block_usage(custom_block_id)
        except PersistenceError as e:
            log.warning("Compteur d'usage %s non mis à jour : %s", custom_block_id, e)
        return self.session.insert_custom_block(custom)

    def toggle_custom_block_favorite(self, custom_block_id: str) -> Optional[CustomBlock]:
        try:
            custom = self.repository.get_custom_block(custom_block_id)
            if custom is not None:
                custom = self.repository.set_custom_block_favorite(custom_block_id, not custom.is_favorite)
        except PersistenceError as e:
            log.error("Favori %s : %s", custom_block_id, e)
            self.notify("error", "Failed to update block")
            return None
        if custom is None:
            self.notify("error", "Custom block not found")
        return custom

    def delete_custom_block(self, custom_block_id: str) -> bool:
        """Supprime de la bibliothèque ; les copies déjà insérées dans des pages restent."""
        try:
            self.repository.delete_custom_block(custom_block_id)
        except CustomBlockNotFound:
            self.notify("error", "Custom block not found")
            return False
        except PersistenceError as e:
            log.error("Suppression bloc %s : %s", custom_block_id, e)
            self.notify("error", "Failed to delete block")
            return False
        self.notify("success", "Block deleted")
        return True

    # ── Rendu ────────────────────────────────────────────────────────────────

    def preview(self) -> str:
        return render_preview(self.session)

    def render(self) -> str:
        return render_page(
            self.session.snapshot(),
            title=self.metadata.seo_title or self.metadata.title,
            description=self.metadata.seo_description or "",
        )
