"""
Router FastAPI — endpoints page_composer.

POST /page-composer/render                      → {blocks, theme} → HTMLResponse
GET  /page-composer/catalog                     → blocs disponibles, champs, contenus par défaut
GET  /page-composer/templates                   → templates de page (catégorie, recherche)
POST /page-composer/import/markup               → HTML brut → blocs extraits
POST /page-composer/import-page-from-url        → {url} → {success, blocks, sourceUrl}
POST /page-composer/pages                       → crée une page (template optionnel)
GET  /page-composer/pages/{id}                  → page enregistrée
PUT  /page-composer/pages/{id}                  → enregistre contenu + réglages → nouvelle version
POST /page-composer/pages/{id}/publish          → publie le dernier contenu enregistré
GET  /page-composer/pages/{id}/html             → rendu HTML du contenu enregistré
GET  /page-composer/pages/{id}/versions         → versions, plus récente d'abord
GET  /page-composer/pages/{id}/versions/{n}     → une version
GET  /page-composer/custom-blocks               → bibliothèque (recherche, catégorie, tri, favoris)
POST /page-composer/custom-blocks               → enregistre un bloc dans la bibliothèque
POST /page-composer/custom-blocks/{id}/use      → +1 usage, copie du bloc avec un id neuf
POST /page-composer/custom-blocks/{id}/favorite → bascule le favori
DELETE /page-composer/custom-blocks/{id}        → supprime de la bibliothèque
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.orm import Session

from ..blocks import dump_block, parse_block
from ..blocks.catalog import (
    BLOCK_TEMPLATES, CATEGORIES, DEFAULT_STYLES, field_schema, library_entries, style_schema,
)
from ..core.schemas import PageSnapshot
from ..editor.session import EditorSession
from ..importer.markup import extract_blocks
from ..importer.remote import FetchError, fetch_markup, validate_url
from ..library.models import LIBRARY_CATEGORIES, SORT_OPTIONS, CustomBlock, search_custom_blocks
from ..persistence.base import CustomBlockNotFound, PageNotFound, PersistenceError
from ..persistence.database import SqlPageRepository, get_db
from ..renderer.html import render_page
from ..templates.catalog import TemplateCatalog, select_template
from ..versioning.models import VersionMetadata
from ..versioning.service import VersioningService

log = logging.getLogger(__name__)

router = APIRouter(prefix="/page-composer", tags=["page_composer"])


# ── Schémas de requête ──────────────────────────────────────────────────────

class RenderRequest(BaseModel):
    blocks: List[Dict[str, Any]] = Field(default_factory=list)
    theme: Dict[str, Any] = Field(default_factory=dict)
    title: str = ""
    lang: str = "en"
    description: str = ""


class MarkupImportRequest(BaseModel):
    markup: str
    base_url: Optional[str] = None


class UrlImportRequest(BaseModel):
    url: str = ""


class PageCreate(BaseModel):
    title: str
    slug: str = ""
    template_id: Optional[str] = None


class PageSave(BaseModel):
    content: Dict[str, Any] = Field(default_factory=dict)
    change_summary: Optional[str] = None
    title: Optional[str] = None
    slug: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None


class CustomBlockCreate(BaseModel):
    name: str
    block: Dict[str, Any]
    description: Optional[str] = None
    category: Optional[str] = None
    tags: Any = ""
    is_favorite: bool = False


# ── Dépendances ─────────────────────────────────────────────────────────────

def get_repository(db: Session = Depends(get_db)) -> SqlPageRepository:
    return SqlPageRepository(db)


def _http_error(e: PersistenceError) -> HTTPException:
    if isinstance(e, (PageNotFound, CustomBlockNotFound)):
        return HTTPException(404, str(e))
    log.error("Persistance : %s", e)
    return HTTPException(503, "Storage unavailable, please retry")


def _page_json(record) -> dict:
    return record.model_dump(mode="json")


# ── Rendu / catalogue ───────────────────────────────────────────────────────

@router.post("/render", response_class=HTMLResponse, summary="Rend {blocks, theme} en HTML")
def render(req: RenderRequest) -> HTMLResponse:
    snapshot = PageSnapshot.from_wire({"blocks": req.blocks, "theme": req.theme})
    return HTMLResponse(content=render_page(snapshot, title=req.title, lang=req.lang, description=req.description))


@router.get("/catalog", summary="Liste les blocs disponibles, leurs champs et contenus par défaut")
def catalog(recent: str = "", category: str = "all", search: str = "") -> dict:
    recent_types = [t for t in recent.split(",") if t]
    return {
        "blocks": [
            {
                **entry.model_dump(),
                "fields": [f.model_dump() for f in field_schema(entry.type)],
                "template": BLOCK_TEMPLATES[entry.type],
            }
            for entry in library_entries(recent_types, category=category, search=search)
        ],
        "categories": CATEGORIES,
        "styles": {"fields": [f.model_dump() for f in style_schema()], "defaults": DEFAULT_STYLES},
    }


@router.get("/templates", summary="Templates de page")
def templates(category: str = "all", search: str = "",
              repo: SqlPageRepository = Depends(get_repository)) -> dict:
    try:
        cat = TemplateCatalog(repo.list_templates())
    except PersistenceError as e:
        raise _http_error(e)
    return {
        "categories": cat.categories(),
        "templates": [t.to_wire() for t in cat.search(search, category)],
    }


# ── Import ──────────────────────────────────────────────────────────────────

@router.post("/import/markup", summary="Extrait des blocs d'un HTML brut")
def import_markup(req: MarkupImportRequest) -> dict:
    result = extract_blocks(req.markup, req.base_url)
    return {
        "success": not result.empty,
        "blocks": [dump_block(b) for b in result.blocks],
        "image_urls": result.image_urls,
    }


@router.post("/import-page-from-url", summary="Récupère une page distante et en extrait les blocs")
def import_page_from_url(req: UrlImportRequest) -> dict:
    problem = validate_url(req.url)
    if problem:
        raise HTTPException(400, problem)
    try:
        markup = fetch_markup(req.url)
    except FetchError as e:
        raise HTTPException(502, str(e))
    result = extract_blocks(markup, base_url=req.url)
    return {
        "success": not result.empty,
        "blocks": [dump_block(b) for b in result.blocks],
        "imageUrls": result.image_urls,
        "sourceUrl": req.url,
    }


# ── Pages ───────────────────────────────────────────────────────────────────

@router.post("/pages", status_code=201, summary="Crée une page")
def create_page(req: PageCreate, repo: SqlPageRepository = Depends(get_repository)) -> dict:
    content = PageSnapshot().to_wire()
    try:
        if req.template_id:
            template = TemplateCatalog(repo.list_templates()).get(req.template_id)
            if template is None:
                raise HTTPException(404, f"Template introuvable : {req.template_id}")
            content = select_template(template).to_wire()
        record = repo.create_page(req.title, req.slug, content)
    except PersistenceError as e:
        raise _http_error(e)
    return _page_json(record)


@router.get("/pages/{page_id}", summary="Page enregistrée")
def get_page(page_id: str, repo: SqlPageRepository = Depends(get_repository)) -> dict:
    try:
        record = repo.get_page(page_id)
    except PersistenceError as e:
        raise _http_error(e)
    if record is None:
        raise HTTPException(404, f"Page introuvable : {page_id}")
    return _page_json(record)


@router.put("/pages/{page_id}", summary="Enregistre la page et crée une version")
def save_page(page_id: str, req: PageSave, repo: SqlPageRepository = Depends(get_repository)) -> dict:
    try:
        record = repo.get_page(page_id)
        if record is None:
            raise PageNotFound(page_id)
        metadata = VersionMetadata(
            title=req.title if req.title is not None else record.title,
            slug=req.slug if req.slug is not None else record.slug,
            seo_title=req.seo_title if req.seo_title is not None else record.seo_title,
            seo_description=req.seo_description if req.seo_description is not None else record.seo_description,
        )
        session = EditorSession.from_snapshot(PageSnapshot.from_wire(req.content))
        version = VersioningService(repo).save(page_id, session, metadata=metadata, change_summary=req.change_summary)
    except PersistenceError as e:
        raise _http_error(e)
    return version.to_wire()


@router.post("/pages/{page_id}/publish", summary="Publie le dernier contenu enregistré")
def publish_page(page_id: str, repo: SqlPageRepository = Depends(get_repository)) -> dict:
    try:
        record = repo.publish_page(page_id, datetime.utcnow())
    except PersistenceError as e:
        raise _http_error(e)
    return _page_json(record)


@router.get("/pages/{page_id}/html", response_class=HTMLResponse, summary="Rendu HTML de la page enregistrée")
def page_html(page_id: str, repo: SqlPageRepository = Depends(get_repository)) -> HTMLResponse:
    try:
        record = repo.get_page(page_id)
    except PersistenceError as e:
        raise _http_error(e)
    if record is None:
        raise HTTPException(404, f"Page introuvable : {page_id}")
    html = render_page(
        PageSnapshot.from_wire(record.content),
        title=record.seo_title or record.title,
        description=record.seo_description or "",
    )
    return HTMLResponse(content=html)


@router.get("/pages/{page_id}/versions", summary="Historique des versions")
def list_versions(page_id: str, repo: SqlPageRepository = Depends(get_repository)) -> dict:
    try:
        if repo.get_page(page_id) is None:
            raise PageNotFound(page_id)
        versions = VersioningService(repo).list_versions(page_id)
    except PersistenceError as e:
        raise _http_error(e)
    return {
        "versions": [
            {
                "version_number": v.version_number,
                "created_at": v.created_at.isoformat(),
                "change_summary": v.change_summary,
                "is_published": v.is_published,
                "block_count": v.block_count,
                "metadata": v.metadata.model_dump(),
            }
            for v in versions
        ]
    }


@router.get("/pages/{page_id}/versions/{version_number}", summary="Une version")
def get_version(page_id: str, version_number: int, repo: SqlPageRepository = Depends(get_repository)) -> dict:
    try:
        version = repo.get_version(page_id, version_number)
    except PersistenceError as e:
        raise _http_error(e)
    if version is None:
        raise HTTPException(404, f"Version introuvable : {version_number}")
    return version.to_wire()


# ── Bibliothèque de blocs ───────────────────────────────────────────────────

def _custom_json(block: CustomBlock) -> dict:
    return block.model_dump(mode="json")


@router.get("/custom-blocks", summary="Blocs personnalisés enregistrés")
def list_custom_blocks(search: str = "", category: str = "all", sort: str = "recent",
                       favorites_only: bool = False,
                       repo: SqlPageRepository = Depends(get_repository)) -> dict:
    try:
        blocks = repo.list_custom_blocks()
    except PersistenceError as e:
        raise _http_error(e)
    found = search_custom_blocks(blocks, search=search, category=category, sort=sort,
                                 favorites_only=favorites_only)
    return {
        "categories": LIBRARY_CATEGORIES,
        "sort_options": list(SORT_OPTIONS),
        "blocks": [_custom_json(b) for b in found],
    }


@router.post("/custom-blocks", status_code=201, summary="Enregistre un bloc dans la bibliothèque")
def create_custom_block(req: CustomBlockCreate, repo: SqlPageRepository = Depends(get_repository)) -> dict:
    block = parse_block(req.block)
    if not block.type:
        raise HTTPException(400, "Block type is required")
    try:
        custom = CustomBlock.from_block(
            block, name=req.name, description=req.description, category=req.category,
            tags=req.tags, is_favorite=req.is_favorite,
        )
    except ValidationError:
        raise HTTPException(422, "Please enter a name for this block")
    try:
        saved = repo.create_custom_block(custom)
    except PersistenceError as e:
        raise _http_error(e)
    return _custom_json(saved)


@router.post("/custom-blocks/{block_id}/use", summary="Copie du bloc prête à insérer (+1 usage)")
def use_custom_block(block_id: str, repo: SqlPageRepository = Depends(get_repository)) -> dict:
    try:
        custom = repo.increment_custom_block_usage(block_id)
    except PersistenceError as e:
        raise _http_error(e)
    return {"block": dump_block(custom.to_block()), "usage_count": custom.usage_count}


@router.post("/custom-blocks/{block_id}/favorite", summary="Bascule le favori")
def toggle_custom_block_favorite(block_id: str, repo: SqlPageRepository = Depends(get_repository)) -> dict:
    try:
        custom = repo.get_custom_block(block_id)
        if custom is None:
            raise CustomBlockNotFound(block_id)
        custom = repo.set_custom_block_favorite(block_id, not custom.is_favorite)
    except PersistenceError as e:
        raise _http_error(e)
    return _custom_json(custom)


@router.delete("/custom-blocks/{block_id}", status_code=204, summary="Supprime un bloc de la bibliothèque")
def delete_custom_block(block_id: str, repo: SqlPageRepository = Depends(get_repository)) -> None:
    try:
        repo.delete_custom_block(block_id)
    except PersistenceError as e:
        raise _http_error(e)
