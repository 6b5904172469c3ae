"""SQLite — init + session + dépôt SQLAlchemy (pages, versions, templates, blocs personnalisés)"""
import json, logging, os
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..core.schemas import PageSnapshot
from ..library.models import CustomBlock
from ..templates.builtin import BUILTIN_TEMPLATES
from ..templates.catalog import PageTemplate
from ..versioning.models import Version, VersionMetadata
from .base import PAGE_SETTINGS, CustomBlockNotFound, PageNotFound, PageRecord, PersistenceError
from .models import Base, CustomBlockDB, PageDB, PageTemplateDB, PageVersionDB

log = logging.getLogger(__name__)

DB_PATH      = os.getenv("PAGE_COMPOSER_DB_PATH", "page_composer.db")


def make_engine(path: str = DB_PATH) -> Engine:
    return create_engine(f"sqlite:///{path}", connect_args={"check_same_thread": False})


ENGINE       = make_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)


def init_db(engine: Engine = ENGINE) -> None:
    Base.metadata.create_all(bind=engine)
    # Seed templates (only if table is empty)
    with Session(engine) as db:
        if db.query(PageTemplateDB).count() == 0:
            for t in BUILTIN_TEMPLATES:
                db.add(PageTemplateDB(
                    id=t["id"], name=t["name"], description=t.get("description", ""),
                    category=t["category"], sort_order=t.get("sort_order", 0),
                    blocks=jd(t.get("blocks", [])), theme=jd(t.get("theme", {})),
                ))
            db.commit()
            log.info("Templates par défaut installés (%s)", len(BUILTIN_TEMPLATES))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── JSON helpers ──
def jl(s: Optional[str]) -> Any:
    try:
        return json.loads(s or "null")
    except ValueError:
        return None


def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False)


# ── Conversions ORM → modèles ──
def _page(row: PageDB) -> PageRecord:
    content = jl(row.content)
    return PageRecord(
        id=row.id, title=row.title, slug=row.slug,
        content=content if isinstance(content, dict) else {"blocks": [], "theme": {}},
        status=row.status if row.status in ("draft", "published") else "draft",
        seo_title=row.seo_title, seo_description=row.seo_description,
        updated_at=row.updated_at or datetime.utcnow(), published_at=row.published_at,
    )


def _version(row: PageVersionDB) -> Version:
    meta = jl(row.meta)
    return Version(
        version_number=row.version_number,
        content=PageSnapshot.from_wire(jl(row.content)),
        metadata=VersionMetadata.model_validate(meta) if isinstance(meta, dict) else VersionMetadata(),
        change_summary=row.change_summary,
        created_at=row.created_at,
        is_published=bool(row.is_published),
    )


def _template(row: PageTemplateDB) -> PageTemplate:
    blocks, theme = jl(row.blocks), jl(row.theme)
    return PageTemplate(
        id=row.id, name=row.name, description=row.description or "",
        category=row.category, thumbnail_url=row.thumbnail_url, sort_order=row.sort_order or 0,
        blocks=blocks if isinstance(blocks, list) else [],
        theme=theme if isinstance(theme, dict) else {},
    )


def _custom_block(row: CustomBlockDB) -> CustomBlock:
    data, tags = jl(row.block_data), jl(row.tags)
    return CustomBlock(
        id=row.id, name=row.name, description=row.description, category=row.category,
        block_data=data if isinstance(data, dict) else {},
        thumbnail_url=row.thumbnail_url, usage_count=row.usage_count or 0,
        is_favorite=bool(row.is_favorite), created_by=row.created_by,
        created_at=row.created_at or datetime.utcnow(),
        tags=tags if isinstance(tags, list) else [],
    )


def _apply_page(row: PageDB, content: dict, updated_at: datetime, settings: dict) -> None:
    row.content    = jd(content)
    row.updated_at = updated_at
    for key in PAGE_SETTINGS:
        if settings.get(key) is not None:
            setattr(row, key, settings[key])


def _version_row(page_id: str, version: Version) -> PageVersionDB:
    return PageVersionDB(
        page_id=page_id,
        version_number=version.version_number,
        content=jd(version.content.to_wire()),
        meta=jd(version.metadata.model_dump()),
        change_summary=version.change_summary,
        is_published=version.is_published,
        created_at=version.created_at,
    )


# ── Dépôt ──
class SqlPageRepository:
    """PageRepository sur une Session SQLAlchemy ; toute erreur SQL → PersistenceError."""

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, op: str, e: Exception) -> PersistenceError:
        self.db.rollback()
        log.error("Échec %s : %s", op, e)
        return PersistenceError(f"{op} failed: {e}")

    def _row(self, page_id: str) -> PageDB:
        row = self.db.get(PageDB, page_id)
        if row is None:
            raise PageNotFound(page_id)
        return row

    def get_page(self, page_id: str) -> Optional[PageRecord]:
        try:
            row = self.db.get(PageDB, page_id)
        except SQLAlchemyError as e:
            raise self._fail("get_page", e)
        return _page(row) if row else None

    def create_page(self, title: str, slug: str, content: Optional[dict] = None) -> PageRecord:
        row = PageDB(title=title, slug=slug, content=jd(content or {"blocks": [], "theme": {}}))
        try:
            self.db.add(row); self.db.commit(); self.db.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail("create_page", e)
        return _page(row)

    def publish_page(self, page_id: str, published_at: datetime) -> PageRecord:
        try:
            row = self._row(page_id)
            row.status       = "published"
            row.published_at = published_at
            self.db.commit(); self.db.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail("publish_page", e)
        return _page(row)

    def list_versions(self, page_id: str) -> List[Version]:
        try:
            rows = (self.db.query(PageVersionDB)
                    .filter(PageVersionDB.page_id == page_id)
                    .order_by(PageVersionDB.version_number.desc())
                    .all())
        except SQLAlchemyError as e:
            raise self._fail("list_versions", e)
        return [_version(r) for r in rows]

    def get_version(self, page_id: str, version_number: int) -> Optional[Version]:
        try:
            row = (self.db.query(PageVersionDB)
                   .filter_by(page_id=page_id, version_number=version_number)
                   .first())
        except SQLAlchemyError as e:
            raise self._fail("get_version", e)
        return _version(row) if row else None

    def save_version(self, page_id: str, content: dict, updated_at: datetime, version: Version,
                     **settings: Any) -> PageRecord:
        """Page + version dans une seule transaction : un échec n'écrit ni l'une ni l'autre."""
        try:
            row = self._row(page_id)
            _apply_page(row, content, updated_at, settings)
            self.db.add(_version_row(page_id, version))
            self.db.commit(); self.db.refresh(row)
        except IntegrityError as e:
            raise self._fail("save_version (numéro déjà pris)", e)
        except SQLAlchemyError as e:
            raise self._fail("save_version", e)
        return _page(row)

    def list_templates(self) -> List[PageTemplate]:
        try:
            rows = self.db.query(PageTemplateDB).order_by(PageTemplateDB.sort_order).all()
        except SQLAlchemyError as e:
            raise self._fail("list_templates", e)
        return [_template(r) for r in rows]

    # ── Blocs personnalisés ──

    def _custom_row(self, block_id: str) -> CustomBlockDB:
        row = self.db.get(CustomBlockDB, block_id)
        if row is None:
            raise CustomBlockNotFound(block_id)
        return row

    def list_custom_blocks(self) -> List[CustomBlock]:
        try:
            rows = self.db.query(CustomBlockDB).order_by(CustomBlockDB.created_at.desc()).all()
        except SQLAlchemyError as e:
            raise self._fail("list_custom_blocks", e)
        return [_custom_block(r) for r in rows]

    def get_custom_block(self, block_id: str) -> Optional[CustomBlock]:
        try:
            row = self.db.get(CustomBlockDB, block_id)
        except SQLAlchemyError as e:
            raise self._fail("get_custom_block", e)
        return _custom_block(row) if row else None

    def create_custom_block(self, block: CustomBlock) -> CustomBlock:
        row = CustomBlockDB(
            id=block.id, name=block.name, description=block.description, category=block.category,
            block_data=jd(block.block_data), thumbnail_url=block.thumbnail_url,
            usage_count=block.usage_count, is_favorite=block.is_favorite,
            created_by=block.created_by, created_at=block.created_at, tags=jd(block.tags),
        )
        try:
            self.db.add(row); self.db.commit(); self.db.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail("create_custom_block", e)
        return _custom_block(row)

    def set_custom_block_favorite(self, block_id: str, is_favorite: bool) -> CustomBlock:
        try:
            row = self._custom_row(block_id)
            row.is_favorite = is_favorite
            self.db.commit(); self.db.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail("set_custom_block_favorite", e)
        return _custom_block(row)

    def increment_custom_block_usage(self, block_id: str) -> CustomBlock:
        """Incrément calculé par la base (usage_count + 1)."""
        try:
            row = self._custom_row(block_id)
            row.usage_count = CustomBlockDB.usage_count + 1
            self.db.commit(); self.db.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail("increment_custom_block_usage", e)
        return _custom_block(row)

    def delete_custom_block(self, block_id: str) -> None:
        try:
            row = self._custom_row(block_id)
            self.db.delete(row); self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete_custom_block", e)
        log.info("Bloc personnalisé %s supprimé", block_id)
