"""
Modèles ORM — pages, versions, templates, blocs personnalisés.
SQLAlchemy (SQLite) ; contenus stockés en JSON texte (format wire camelCase).
"""
import uuid
from datetime import datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class PageDB(Base):
    __tablename__ = "pages"
    id:              Mapped[str]                = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title:           Mapped[str]                = mapped_column(sa.String, nullable=False, default="")
    slug:            Mapped[str]                = mapped_column(sa.String, nullable=False, default="", index=True)
    content:         Mapped[str]                = mapped_column(sa.Text, nullable=False, default='{"blocks": [], "theme": {}}')
    status:          Mapped[str]                = mapped_column(sa.String, nullable=False, default="draft")
    seo_title:       Mapped[Optional[str]]      = mapped_column(sa.String, nullable=True)
    seo_description: Mapped[Optional[str]]      = mapped_column(sa.Text, nullable=True)
    updated_at:      Mapped[datetime]           = mapped_column(sa.DateTime, default=datetime.utcnow)
    published_at:    Mapped[Optional[datetime]] = mapped_column(sa.DateTime, nullable=True)


class PageVersionDB(Base):
    __tablename__ = "page_versions"
    __table_args__ = (sa.UniqueConstraint("page_id", "version_number", name="uq_page_version"),)
    id:             Mapped[str]           = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    page_id:        Mapped[str]           = mapped_column(sa.String, sa.ForeignKey("pages.id"), nullable=False, index=True)
    version_number: Mapped[int]           = mapped_column(sa.Integer, nullable=False)
    content:        Mapped[str]           = mapped_column(sa.Text, nullable=False)
    meta:           Mapped[str]           = mapped_column("metadata", sa.Text, nullable=False, default="{}")
    change_summary: Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    is_published:   Mapped[bool]          = mapped_column(sa.Boolean, default=False)
    created_at:     Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)


class PageTemplateDB(Base):
    __tablename__ = "page_templates"
    id:            Mapped[str]           = mapped_column(sa.String, primary_key=True)
    name:          Mapped[str]           = mapped_column(sa.String, nullable=False)
    description:   Mapped[str]           = mapped_column(sa.Text, default="")
    category:      Mapped[str]           = mapped_column(sa.String, nullable=False, index=True)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    blocks:        Mapped[str]           = mapped_column(sa.Text, default="[]")
    theme:         Mapped[str]           = mapped_column(sa.Text, default="{}")
    sort_order:    Mapped[int]           = mapped_column(sa.Integer, default=0)


class CustomBlockDB(Base):
    __tablename__ = "custom_blocks"
    id:            Mapped[str]           = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name:          Mapped[str]           = mapped_column(sa.String, nullable=False)
    description:   Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    category:      Mapped[str]           = mapped_column(sa.String, nullable=False, default="custom", index=True)
    block_data:    Mapped[str]           = mapped_column(sa.Text, nullable=False, default="{}")
    thumbnail_url: Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    usage_count:   Mapped[int]           = mapped_column(sa.Integer, nullable=False, default=0)
    is_favorite:   Mapped[bool]          = mapped_column(sa.Boolean, nullable=False, default=False)
    created_by:    Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    created_at:    Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    tags:          Mapped[str]           = mapped_column(sa.Text, nullable=False, default="[]")
