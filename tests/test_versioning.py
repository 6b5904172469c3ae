"""Tests versioning — numérotation, snapshot immuable, restauration annulable."""
from datetime import datetime

import pytest
from pydantic import ValidationError

from page_composer.editor.session import EditorSession
from page_composer.persistence.base import InMemoryPageRepository, PageNotFound
from page_composer.versioning import Version, VersioningService, VersionMetadata


@pytest.fixture
def repo():
    return InMemoryPageRepository()


@pytest.fixture
def page(repo):
    return repo.create_page("Accueil", "accueil")


def test_version_numbers_increase(repo, page):
    svc = VersioningService(repo)
    s = EditorSession()
    v1 = svc.save(page.id, s)
    s.add_block("hero")
    v2 = svc.save(page.id, s)
    assert (v1.version_number, v2.version_number) == (1, 2)
    assert [v.version_number for v in svc.list_versions(page.id)] == [2, 1]
    assert svc.next_version_number(page.id) == 3


def test_save_writes_page_content_and_metadata(repo, page):
    svc = VersioningService(repo)
    s = EditorSession()
    s.add_block("cta")
    meta = VersionMetadata(title="Offre", slug="offre", seo_title="SEO")
    v = svc.save(page.id, s, metadata=meta, change_summary="premier jet", now=datetime(2024, 5, 1))

    record = repo.get_page(page.id)
    assert record.title == "Offre"
    assert record.seo_title == "SEO"
    assert record.updated_at == datetime(2024, 5, 1)
    assert record.content["blocks"][0]["type"] == "cta"
    assert v.change_summary == "premier jet"
    assert v.block_count == 1
    assert v.metadata.slug == "offre"


def test_default_metadata_from_page(repo, page):
    v = VersioningService(repo).save(page.id, EditorSession())
    assert v.metadata.title == "Accueil"
    assert v.metadata.slug == "accueil"


def test_is_published_reflects_page_status(repo, page):
    svc = VersioningService(repo)
    assert svc.save(page.id, EditorSession()).is_published is False
    repo.publish_page(page.id, datetime(2024, 1, 1))
    assert svc.save(page.id, EditorSession()).is_published is True


def test_save_unknown_page(repo):
    with pytest.raises(PageNotFound):
        VersioningService(repo).save("nope", EditorSession())


def test_version_snapshot_is_independent_of_session(repo, page):
    svc = VersioningService(repo)
    s = EditorSession()
    b = s.add_block("text")
    v = svc.save(page.id, s)
    s.update_content(b.id, {"text": "<p>après</p>"})
    assert v.content.blocks[0].content.text != "<p>après</p>"


def test_version_is_frozen():
    v = Version(version_number=1)
    with pytest.raises(ValidationError):
        v.version_number = 2


def test_save_restore_scenario(repo, page):
    """Enregistrer v1, éditer, enregistrer v2, restaurer v1, puis annuler la restauration."""
    svc = VersioningService(repo)
    s = EditorSession()
    s.add_block("hero")
    svc.save(page.id, s)
    s.add_block("cta")
    svc.save(page.id, s)
    v2_wire = s.snapshot().to_wire()

    v1 = svc.get_version(page.id, 1)
    svc.restore(s, v1)
    assert [b.type for b in s.blocks] == ["hero"]
    assert len(svc.list_versions(page.id)) == 2

    assert s.undo()
    assert s.snapshot().to_wire() == v2_wire


def test_restore_does_not_mutate_version(repo, page):
    svc = VersioningService(repo)
    s = EditorSession()
    b = s.add_block("text")
    v = svc.save(page.id, s)
    svc.restore(s, v)
    s.update_content(s.blocks[0].id, {"text": "<p>modifié</p>"})
    assert v.content.blocks[0].id == b.id
    assert v.content.blocks[0].content.text != "<p>modifié</p>"


def test_version_to_wire(repo, page):
    v = VersioningService(repo).save(page.id, EditorSession(), now=datetime(2024, 2, 3, 4, 5))
    wire = v.to_wire()
    assert wire["version_number"] == 1
    assert wire["created_at"] == "2024-02-03T04:05:00"
    assert wire["metadata"]["seo_description"] is None
    assert wire["content"]["blocks"] == []
