"""Tests contrôleur d'édition — frontières (enregistrement, publication, import, bibliothèque) et notifications."""
from unittest.mock import patch

import pytest

from page_composer.blocks import parse_block
from page_composer.editor import BLOCK_NAME_REQUIRED, NO_CONTENT_MESSAGE, PageEditor
from page_composer.importer import RemoteImportResult
from page_composer.library import CustomBlock
from page_composer.persistence import InMemoryPageRepository, PageNotFound, PersistenceError
from page_composer.templates import builtin_templates


class FlakyRepository(InMemoryPageRepository):
    """Dépôt dont les écritures échouent."""

    def save_version(self, *args, **kwargs):
        raise PersistenceError("disque plein")

    def publish_page(self, *args, **kwargs):
        raise PersistenceError("disque plein")


class StaleNumberingRepository(InMemoryPageRepository):
    """Dépôt qui ne voit jamais les versions existantes : le numéro suivant est toujours 1."""

    def list_versions(self, page_id):
        return []


def _messages(editor):
    return [(n.level, n.message) for n in editor.pop_notifications()]


@pytest.fixture
def repo():
    return InMemoryPageRepository(templates=builtin_templates())


@pytest.fixture
def editor(repo):
    page = repo.create_page("Accueil", "accueil")
    return PageEditor.open(repo, page.id)


# ── Chargement ───────────────────────────────────────────────────────────────

def test_open_missing_page(repo):
    with pytest.raises(PageNotFound):
        PageEditor.open(repo, "nope")


def test_open_loads_stored_content(repo):
    page = repo.create_page("P", "p", content={
        "blocks": [{"id": "b1", "type": "hero", "content": {"headline": "Stocké"}}],
        "theme": {"primaryColor": "#111111"},
    })
    editor = PageEditor.open(repo, page.id)
    assert editor.session.blocks[0].content.headline == "Stocké"
    assert editor.session.theme.primary_color == "#111111"
    assert not editor.session.can_undo


# ── Enregistrement ───────────────────────────────────────────────────────────

def test_save_success(editor, repo):
    editor.session.add_block("hero")
    assert editor.has_unsaved_changes
    version = editor.save("premier jet")
    assert version.version_number == 1
    assert not editor.has_unsaved_changes
    assert _messages(editor) == [("success", "Page saved successfully!")]
    assert repo.get_page(editor.page.id).content["blocks"][0]["type"] == "hero"


def test_save_applies_settings(editor, repo):
    editor.update_settings(title="Nouveau titre", seo_description="Desc", unknown="ignoré")
    editor.save()
    record = repo.get_page(editor.page.id)
    assert record.title == "Nouveau titre"
    assert record.seo_description == "Desc"


def test_save_failure_keeps_session():
    repo = FlakyRepository()
    page = repo.create_page("Accueil", "accueil")
    editor = PageEditor.open(repo, page.id)
    editor.session.add_block("text")
    before = editor.session.snapshot().to_wire()

    assert editor.save() is None
    assert _messages(editor) == [("error", "Failed to save page")]
    assert editor.session.snapshot().to_wire() == before
    assert editor.has_unsaved_changes
    assert repo.list_versions(page.id) == []


def test_failed_version_write_keeps_stored_page():
    repo = StaleNumberingRepository()
    page = repo.create_page("Accueil", "accueil")
    editor = PageEditor.open(repo, page.id)
    assert editor.save().version_number == 1
    editor.pop_notifications()

    editor.session.add_block("hero")
    assert editor.save() is None
    assert _messages(editor) == [("error", "Failed to save page")]
    assert repo.get_page(page.id).content["blocks"] == []
    assert editor.has_unsaved_changes


def test_unsaved_after_save_undo_edit(editor):
    editor.session.add_block("hero")
    editor.save()
    editor.session.undo()
    editor.session.add_block("text")
    assert editor.has_unsaved_changes
    editor.pop_notifications()
    editor.publish()
    assert [level for level, _ in _messages(editor)] == ["info", "success"]


def test_unsaved_after_toggle_hidden(editor):
    block = editor.session.add_block("hero")
    editor.save()
    editor.session.toggle_hidden(block.id)
    assert editor.has_unsaved_changes
    editor.session.toggle_hidden(block.id)
    assert not editor.has_unsaved_changes


def test_edit_then_undo_back_is_clean(editor):
    editor.session.add_block("cta")
    assert editor.has_unsaved_changes
    editor.session.undo()
    assert not editor.has_unsaved_changes


# ── Publication ──────────────────────────────────────────────────────────────

def test_publish_after_save(editor):
    editor.session.add_block("cta")
    editor.save()
    editor.pop_notifications()
    assert editor.publish()
    assert editor.page.status == "published"
    assert _messages(editor) == [("success", "Page published successfully!")]
    assert editor.save().is_published


def test_publish_with_unsaved_changes_warns(editor):
    editor.session.add_block("cta")
    assert editor.publish()
    levels = [level for level, _ in _messages(editor)]
    assert levels == ["info", "success"]


def test_publish_failure():
    repo = FlakyRepository()
    page = repo.create_page("Accueil", "accueil")
    editor = PageEditor.open(repo, page.id)
    assert editor.publish() is False
    assert _messages(editor) == [("error", "Failed to publish page")]


# ── Versions ─────────────────────────────────────────────────────────────────

def test_restore_version_is_undoable(editor):
    editor.session.add_block("hero")
    editor.update_settings(title="V1")
    editor.save()
    editor.session.add_block("stats")
    editor.update_settings(title="V2")
    editor.save()

    assert [v.version_number for v in editor.versions()] == [2, 1]
    assert editor.restore(1)
    assert [b.type for b in editor.session.blocks] == ["hero"]
    assert editor.metadata.title == "V1"
    assert editor.has_unsaved_changes

    editor.session.undo()
    assert [b.type for b in editor.session.blocks] == ["hero", "stats"]


def test_restore_missing_version(editor):
    assert editor.restore(42) is False
    assert _messages(editor) == [("error", "Version 42 not found")]


# ── Templates ────────────────────────────────────────────────────────────────

def test_apply_template(editor):
    catalog = editor.template_catalog()
    editor.apply_template(catalog.get("sales-page"))
    assert editor.session.blocks[0].type == "hero"
    assert editor.session.theme.primary_color == "#DC2626"
    editor.session.undo()
    assert editor.session.blocks == []


def test_apply_blank_template_keeps_theme(editor):
    editor.session.add_block("text")
    theme = editor.session.theme.model_copy(update={"primary_color": "#222222"})
    editor.session.set_theme(theme)
    editor.apply_template(editor.template_catalog().get("blank"))
    assert editor.session.blocks == []
    assert editor.session.theme.primary_color == "#222222"


# ── Import ───────────────────────────────────────────────────────────────────

def test_import_markup_appends(editor):
    editor.session.add_block("text")
    count = editor.import_markup('<h1>Bonjour</h1><img src="/a.png">')
    assert count == 2
    assert [b.type for b in editor.session.blocks] == ["text", "hero", "image"]
    assert editor.extracted_image_urls == ["/a.png"]
    editor.session.undo()
    assert [b.type for b in editor.session.blocks] == ["text"]


def test_import_markup_nothing_found(editor):
    assert editor.import_markup("<div></div>") == 0
    assert _messages(editor) == [("error", NO_CONTENT_MESSAGE)]
    assert editor.session.blocks == []


def test_import_url_invalid(editor):
    assert editor.import_url("example.com") == 0
    assert _messages(editor) == [("error", "URL must start with http:// or https://")]


def test_import_url_failure_reports_no_content(editor):
    failed = RemoteImportResult(error="No blocks were extracted from the page")
    with patch("page_composer.editor.controller.import_from_url", return_value=failed):
        assert editor.import_url("https://example.com") == 0
    assert _messages(editor) == [("error", NO_CONTENT_MESSAGE)]


def test_import_url_success(editor):
    ok = RemoteImportResult(success=True, blocks=[parse_block({"type": "cta"})])
    with patch("page_composer.editor.controller.import_from_url", return_value=ok):
        assert editor.import_url("https://example.com") == 1
    assert editor.session.blocks[0].type == "cta"


# ── Rendu ────────────────────────────────────────────────────────────────────

def test_render_uses_seo_title(editor):
    editor.session.add_block("hero")
    editor.update_settings(seo_title="Titre SEO")
    html = editor.render()
    assert "<title>Titre SEO</title>" in html
    assert "block--hero" in editor.preview()


# ── Bibliothèque de blocs ────────────────────────────────────────────────────

class FlakyLibraryRepository(InMemoryPageRepository):
    """Dépôt dont la bibliothèque refuse les écritures."""

    def create_custom_block(self, *args, **kwargs):
        raise PersistenceError("disque plein")

    def increment_custom_block_usage(self, *args, **kwargs):
        raise PersistenceError("disque plein")


def test_save_block_to_library_and_reuse(editor, repo):
    hero = editor.session.add_block("hero")
    editor.session.update_content(hero.id, {"headline": "Soldes"})
    saved = editor.save_block_to_library(hero.id, "Hero soldes", tags="promo, hiver")
    assert saved.category == "hero"
    assert saved.tags == ["promo", "hiver"]
    assert _messages(editor) == [("success", 'Block "Hero soldes" saved to library')]

    inserted = editor.use_custom_block(saved.id)
    assert inserted.id != hero.id
    assert inserted.content.headline == "Soldes"
    assert editor.session.selected_block_id == inserted.id
    assert repo.get_custom_block(saved.id).usage_count == 1
    assert [b.name for b in editor.custom_blocks(search="HIVER")] == ["Hero soldes"]


def test_save_block_requires_name(editor, repo):
    block = editor.session.add_block("text")
    assert editor.save_block_to_library(block.id, "  ") is None
    assert _messages(editor) == [("error", BLOCK_NAME_REQUIRED)]
    assert repo.list_custom_blocks() == []


def test_save_block_unknown_id(editor):
    assert editor.save_block_to_library("nope", "Nom") is None
    assert _messages(editor) == [("error", "Block nope not found")]


def test_save_block_storage_failure():
    repo = FlakyLibraryRepository()
    page = repo.create_page("Accueil", "accueil")
    editor = PageEditor.open(repo, page.id)
    block = editor.session.add_block("cta")
    assert editor.save_block_to_library(block.id, "CTA") is None
    assert _messages(editor) == [("error", "Failed to save block. Please try again.")]


def test_use_custom_block_inserts_even_if_usage_count_fails():
    repo = FlakyLibraryRepository()
    custom = CustomBlock(name="Chiffres", block_data={"type": "stats"})
    repo.custom_blocks[custom.id] = custom
    editor = PageEditor.open(repo, repo.create_page("A", "a").id)
    assert editor.use_custom_block(custom.id).type == "stats"
    assert repo.get_custom_block(custom.id).usage_count == 0


def test_use_missing_custom_block(editor):
    assert editor.use_custom_block("nope") is None
    assert _messages(editor) == [("error", "Custom block not found")]
    assert editor.session.blocks == []


def test_toggle_favorite_and_delete(editor, repo):
    block = editor.session.add_block("pricing")
    saved = editor.save_block_to_library(block.id, "Tarifs")
    assert editor.toggle_custom_block_favorite(saved.id).is_favorite
    assert [b.name for b in editor.custom_blocks(favorites_only=True)] == ["Tarifs"]
    assert editor.toggle_custom_block_favorite(saved.id).is_favorite is False

    editor.use_custom_block(saved.id)
    editor.pop_notifications()
    assert editor.delete_custom_block(saved.id)
    assert editor.custom_blocks() == []
    # les copies déjà insérées restent dans la page
    assert [b.type for b in editor.session.blocks] == ["pricing", "pricing"]
    assert editor.delete_custom_block(saved.id) is False
    assert _messages(editor) == [("success", "Block deleted"), ("error", "Custom block not found")]
