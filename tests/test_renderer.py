"""Tests renderer HTML — totalité, variantes, styles dérivés, page complète."""
import pytest

from page_composer.blocks import BLOCK_REGISTRY, BLOCK_TYPES, UnknownBlock, parse_block
from page_composer.blocks.catalog import new_block
from page_composer.core.schemas import PageSnapshot, Theme
from page_composer.editor.session import EditorSession
from page_composer.renderer import HtmlRenderer, Renderer, render_block, render_page, render_preview
from page_composer.renderer.css import generate_theme_css


# ── Totalité ─────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("block_type", BLOCK_TYPES)
def test_every_type_renders_with_empty_content(block_type):
    b = BLOCK_REGISTRY[block_type]()
    html = render_block(b, Theme())
    assert html
    assert f"block--{block_type}" in html


@pytest.mark.parametrize("block_type", BLOCK_TYPES)
def test_every_type_renders_template(block_type):
    assert render_block(new_block(block_type))


@pytest.mark.parametrize("block_type", BLOCK_TYPES)
def test_hidden_block_renders_nothing(block_type):
    b = new_block(block_type).model_copy(update={"hidden": True})
    assert render_block(b) is None


def test_unknown_block_renders_nothing():
    assert render_block(UnknownBlock(type="carousel")) is None


# ── Variantes ────────────────────────────────────────────────────────────────

def test_hero_gradient_without_image():
    b = new_block("hero").with_content({"backgroundImage": ""})
    html = render_block(b, Theme(primary_color="#123456"))
    assert "linear-gradient(135deg, #123456 0%, #0f172a 100%)" in html
    assert "color:#ffffff" in html


def test_hero_image_overlay():
    b = new_block("hero").with_content({"backgroundImage": "/bg.jpg"})
    html = render_block(b)
    assert "url('/bg.jpg')" in html
    assert "rgba(10, 30, 60, 0.7)" in html


def test_stats_default_background_is_primary():
    html = render_block(new_block("stats"), Theme(primary_color="#10b981"))
    assert "background:#10b981" in html


def test_stats_light_background_gets_dark_text():
    b = new_block("stats").with_styles({"backgroundColor": "#f8fafc"})
    html = render_block(b)
    assert "color:#0f172a" in html


def test_cta_default_dark_background():
    html = render_block(new_block("cta"))
    assert "background:#0f172a" in html
    assert "color:#ffffff" in html


def test_cta_light_text_on_light_background_corrected():
    b = new_block("cta").with_styles({"backgroundColor": "#ffffff", "textColor": "#fafafa"})
    html = render_block(b)
    assert "color:#0f172a" in html
    assert "color:#fafafa" not in html


def test_features_icon_fallback_star():
    b = new_block("features").with_content({"features": [
        {"title": "A", "description": "a", "icon": "🚀"},
        {"title": "B", "description": "b", "icon": "rocket-icon"},
    ]})
    html = render_block(b)
    assert "🚀" in html
    assert "★" in html


def test_pricing_most_popular_badge():
    html = render_block(new_block("pricing"))
    assert html.count("Most Popular") == 1
    assert "pricing__card--featured" in html


def test_pricing_without_plans_renders_empty_state():
    b = new_block("pricing").with_content({"plans": []})
    assert "pricing__empty" in render_block(b)


def test_video_iframe_then_thumbnail_then_nothing():
    b = new_block("video")
    assert "<iframe" in render_block(b)

    thumb = b.with_content({"url": "", "thumbnailUrl": "/thumb.jpg"})
    html = render_block(thumb)
    assert "<iframe" not in html
    assert "/thumb.jpg" in html
    assert "▶" in html

    bare = b.with_content({"url": "", "thumbnailUrl": ""})
    html = render_block(bare)
    assert "<iframe" not in html
    assert "<img" not in html


def test_form_textarea_and_required():
    b = new_block("form").with_content({"fields": [
        {"name": "msg", "label": "Message", "type": "textarea", "required": True},
    ]})
    html = render_block(b)
    assert '<textarea name="msg"' in html
    assert "required" in html
    assert ">Submit<" in html


def test_padding_and_alignment_classes():
    b = new_block("text").with_styles({"padding": "xlarge", "alignment": "center"})
    html = render_block(b)
    assert "block--pad-xlarge" in html
    assert "block--align-center" in html
    assert "padding:4rem" in html
    assert "text-align:center" in html


def test_user_text_is_escaped_except_text_body():
    hero = new_block("hero").with_content({"headline": "<script>x</script>"})
    assert "<script>" not in render_block(hero)
    assert "&lt;script&gt;" in render_block(hero)

    text = new_block("text").with_content({"text": "<strong>gras</strong>"})
    assert "<strong>gras</strong>" in render_block(text)


# ── Page complète / aperçu ───────────────────────────────────────────────────

def test_render_page_skips_hidden_blocks():
    hero = new_block("hero").with_content({"headline": "Visible"})
    cta = new_block("cta").with_content({"headline": "Caché"}).model_copy(update={"hidden": True})
    html = render_page(PageSnapshot(blocks=[hero, cta]), title="Accueil", description="Desc")
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Accueil</title>" in html
    assert 'name="description" content="Desc"' in html
    assert "Visible" in html
    assert "Caché" not in html


def test_render_page_from_wire_with_unknown_block():
    snapshot = PageSnapshot.from_wire({"blocks": [
        {"id": "x", "type": "carousel", "content": {}},
        {"id": "y", "type": "text", "content": {"text": "<p>Hello</p>"}},
    ]})
    html = render_page(snapshot)
    assert "<p>Hello</p>" in html
    assert "carousel" not in html


def test_theme_css_variables():
    css = generate_theme_css(Theme(primary_color="#808080", border_radius="large"))
    assert "--color-primary:       #808080" in css
    assert "--color-primary-dark:  #6c6c6c" in css
    assert "--border-radius:    16px" in css
    assert ".block--pad-none { padding: 0; }" in css


def test_theme_css_tolerates_unparseable_color():
    css = generate_theme_css(Theme(primary_color="var(--brand)"))
    assert "--color-primary:       var(--brand)" in css


def test_theme_rejects_values_that_escape_the_style_element():
    theme = Theme.model_validate({
        "primaryColor": "red;}</style><script>alert(1)</script>",
        "secondaryColor": "#fff} body{display:none",
        "fontFamily": "Inter</style><script>alert(1)</script>",
    })
    assert theme.primary_color == "#3B82F6"
    assert theme.secondary_color == "#10B981"
    html = render_page(PageSnapshot(blocks=[new_block("hero")], theme=theme))
    assert "<script>" not in html
    assert html.count("</style>") == 1
    assert "display:none" not in html


def test_theme_font_family_cleanup():
    assert Theme(font_family="Georgia, 'Times New Roman', serif").font_family == "Georgia, 'Times New Roman', serif"
    assert Theme(font_family="{};<>").font_family == "Inter, sans-serif"
    assert Theme.model_validate({"fontFamily": 12}).font_family == "Inter, sans-serif"


def test_hero_background_image_cannot_break_out_of_url():
    b = new_block("hero").with_content({"backgroundImage": "/a.jpg');color:red;background:url('x"})
    html = render_block(b)
    assert "%27%29%3B" in html
    assert "color:red;" not in html


def test_render_preview_width():
    session = EditorSession()
    session.add_block("hero")
    session.set_preview_mode("mobile")
    html = render_preview(session)
    assert "max-width:375px" in html
    assert "block--hero" in html


def test_render_preview_empty_session():
    assert "No blocks yet" in render_preview(EditorSession())


def test_html_renderer_protocol():
    r = HtmlRenderer(lang="fr")
    assert isinstance(r, Renderer)
    assert '<html lang="fr">' in r.render_page(PageSnapshot(), title="T")


def test_snapshot_wire_round_trip_keeps_order():
    blocks = [new_block(t) for t in ("hero", "text", "cta")]
    wire = PageSnapshot(blocks=blocks, theme=Theme()).to_wire()
    assert [b["type"] for b in wire["blocks"]] == ["hero", "text", "cta"]
    again = PageSnapshot.from_wire(wire)
    assert [b.id for b in again.blocks] == [b.id for b in blocks]
    assert again.theme.primary_color == "#3B82F6"
    assert wire["theme"]["fontFamily"] == "Inter, sans-serif"
