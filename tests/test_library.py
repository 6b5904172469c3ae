"""Tests bibliothèque de blocs personnalisés — modèle, recherche, tri."""
from datetime import datetime

import pytest
from pydantic import ValidationError

from page_composer.blocks import HeroBlock
from page_composer.blocks.catalog import new_block
from page_composer.library import CustomBlock, parse_tags, search_custom_blocks


def _custom(name, **kw):
    return CustomBlock(name=name, block_data={"type": "text", "content": {"text": name}}, **kw)


# ── Modèle ───────────────────────────────────────────────────────────────────

def test_parse_tags():
    assert parse_tags(" promo, hiver ,, noël ") == ["promo", "hiver", "noël"]
    assert parse_tags(["a", " ", 3, "b "]) == ["a", "b"]
    assert parse_tags(None) == []


def test_name_required():
    with pytest.raises(ValidationError):
        CustomBlock(name="   ")
    assert CustomBlock(name="  Mon hero ").name == "Mon hero"


def test_unknown_category_becomes_custom():
    assert _custom("A", category="carousel").category == "custom"
    assert _custom("B", category="pricing").category == "pricing"


def test_from_block_keeps_type_content_styles_only():
    hero = new_block("hero").with_content({"headline": "Soldes"}).model_copy(update={"locked": True})
    custom = CustomBlock.from_block(hero, name="Hero soldes", tags="promo, hiver", description=" ")
    assert custom.category == "hero"
    assert custom.description is None
    assert custom.tags == ["promo", "hiver"]
    assert set(custom.block_data) == {"type", "content", "styles"}
    assert custom.block_data["content"]["headline"] == "Soldes"


def test_from_block_is_deep_copy():
    hero = new_block("hero")
    custom = CustomBlock.from_block(hero, name="H")
    custom.block_data["content"]["headline"] = "modifié"
    assert hero.content.headline != "modifié"


def test_to_block_fresh_id_each_time():
    custom = CustomBlock.from_block(new_block("hero").with_content({"headline": "Soldes"}), name="H")
    a, b = custom.to_block(), custom.to_block()
    assert isinstance(a, HeroBlock)
    assert a.id != b.id
    assert a.content.headline == "Soldes"
    a.content.headline = "autre"
    assert custom.to_block().content.headline == "Soldes"


# ── Recherche / tri ──────────────────────────────────────────────────────────

@pytest.fixture
def library():
    return [
        _custom("Ancien", created_at=datetime(2024, 1, 1), usage_count=9, tags=["promo"]),
        _custom("Milieu", created_at=datetime(2024, 2, 1), usage_count=1, is_favorite=True,
                description="Bandeau d'accueil"),
        _custom("Récent", created_at=datetime(2024, 3, 1), usage_count=5, category="hero"),
    ]


def test_default_sort_is_most_recent_first(library):
    assert [b.name for b in search_custom_blocks(library)] == ["Récent", "Milieu", "Ancien"]


def test_sort_popular(library):
    assert [b.name for b in search_custom_blocks(library, sort="popular")] == ["Ancien", "Récent", "Milieu"]


def test_sort_favorites_first_keeps_recent_order(library):
    assert [b.name for b in search_custom_blocks(library, sort="favorites")] == ["Milieu", "Récent", "Ancien"]


def test_search_name_description_and_tags(library):
    assert [b.name for b in search_custom_blocks(library, search="PROMO")] == ["Ancien"]
    assert [b.name for b in search_custom_blocks(library, search="accueil")] == ["Milieu"]
    assert [b.name for b in search_custom_blocks(library, search="réc")] == ["Récent"]


def test_filter_category_and_favorites(library):
    assert [b.name for b in search_custom_blocks(library, category="hero")] == ["Récent"]
    assert [b.name for b in search_custom_blocks(library, favorites_only=True)] == ["Milieu"]
    assert search_custom_blocks(library, category="video") == []
