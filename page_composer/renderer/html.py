"""
Renderer HTML — (bloc, thème) → fragment HTML, et page complète.

Fonctions pures, sans I/O : appelables à chaque frappe pour l'aperçu.
Dispatch par isinstance sur les 11 variantes ; bloc masqué ou type inconnu
→ None. Le contenu utilisateur est échappé, sauf le corps du bloc text
(texte riche par contrat).
"""
from html import escape
from typing import Any, List, Optional
from urllib.parse import quote

from ..blocks import (
    BaseBlock, HeroBlock, TextBlock, ImageBlock, CTABlock, FeaturesBlock,
    TestimonialBlock, FormBlock, PricingBlock, VideoBlock, GalleryBlock, StatsBlock,
)
from ..core.schemas import PageSnapshot, Theme
from .css import generate_theme_css
from .styles import (
    PREVIEW_WIDTHS,
    alignment_css, alignment_key, foreground_color, padding_css, padding_key,
)

HERO_OVERLAY  = "rgba(10, 30, 60, 0.7)"
DARK_BG       = "#0f172a"
FEATURE_STAR  = "★"
PLAY_GLYPH    = "▶"


def _e(value: Any) -> str:
    return escape(str(value or ""), quote=True)


def _css_url(url: str) -> str:
    """URL percent-encodée pour url('…') : ni quote, ni parenthèse, ni point-virgule."""
    return quote(url, safe="/:?#[]@!$&*+,=%~")


# ── Point d'entrée public ───────────────────────────────────────────────────

def render_block(block: BaseBlock, theme: Optional[Theme] = None) -> Optional[str]:
    """HTML d'un bloc, ou None (bloc masqué / type non reconnu). Ne lève jamais sur contenu manquant."""
    if block.hidden:
        return None
    theme = theme or Theme()

    if isinstance(block, HeroBlock):        return render_hero_block(block, theme)
    if isinstance(block, TextBlock):        return render_text_block(block, theme)
    if isinstance(block, ImageBlock):       return render_image_block(block, theme)
    if isinstance(block, CTABlock):         return render_cta_block(block, theme)
    if isinstance(block, FeaturesBlock):    return render_features_block(block, theme)
    if isinstance(block, TestimonialBlock): return render_testimonial_block(block, theme)
    if isinstance(block, FormBlock):        return render_form_block(block, theme)
    if isinstance(block, PricingBlock):     return render_pricing_block(block, theme)
    if isinstance(block, VideoBlock):       return render_video_block(block, theme)
    if isinstance(block, GalleryBlock):     return render_gallery_block(block, theme)
    if isinstance(block, StatsBlock):       return render_stats_block(block, theme)

    return None


def render_blocks(blocks: List[BaseBlock], theme: Optional[Theme] = None) -> str:
    """Concatène les blocs visibles dans l'ordre de la séquence."""
    parts = (render_block(b, theme) for b in blocks)
    return "\n".join(p for p in parts if p)


def render_page(
    snapshot: PageSnapshot,
    title: str = "",
    lang: str = "en",
    description: str = "",
    extra_head: str = "",
) -> str:
    """Génère le HTML complet d'une page (blocs masqués exclus)."""
    css  = generate_theme_css(snapshot.theme)
    body = render_blocks(snapshot.blocks, snapshot.theme)
    meta = f'<meta name="description" content="{_e(description)}">' if description else ""

    return f"""<!DOCTYPE html>
<html lang="{_e(lang)}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{_e(title)}</title>
  {meta}
  <style>{css}</style>
  {extra_head}
</head>
<body>
<main class="page">
{body}
</main>
</body>
</html>"""


def render_preview(session: Any) -> str:
    """Aperçu live d'une session d'édition, à la largeur du mode courant."""
    mode  = getattr(session, "preview_mode", "desktop")
    width = PREVIEW_WIDTHS.get(mode, PREVIEW_WIDTHS["desktop"])
    body  = render_blocks(session.blocks, session.theme)
    if not body:
        body = '<div class="preview__empty">No blocks yet. Add a block to get started.</div>'
    return f"""<div class="preview preview--{mode}" style="max-width:{width};margin:0 auto;">
<style>{generate_theme_css(session.theme)}</style>
{body}
</div>"""


class HtmlRenderer:
    """Implémentation HTML du protocole Renderer."""

    def __init__(self, lang: str = "en"):
        self.lang = lang

    def render_page(self, snapshot: PageSnapshot, title: str = "") -> str:
        return render_page(snapshot, title=title, lang=self.lang)

    def render_block(self, block: BaseBlock, theme: Optional[Theme] = None) -> Optional[str]:
        return render_block(block, theme)


# ── Cadre commun ────────────────────────────────────────────────────────────

def _frame(b: BaseBlock, inner: str, default_bg: Optional[str] = None,
           background: Optional[str] = None, contrast_bg: Optional[str] = None) -> str:
    """
    <section> commun : fond, couleur de texte dérivée, padding, alignement.

    `background` remplace la valeur CSS du fond (gradient, image) ;
    `contrast_bg` est alors la couleur unie de référence pour le texte.
    """
    s  = b.styles
    bg = s.background_color or default_bg
    fg = foreground_color(contrast_bg or bg, s.text_color)

    classes = [
        "block", f"block--{b.type}",
        f"block--pad-{padding_key(s.padding)}",
        f"block--align-{alignment_key(s.alignment)}",
    ]
    inline = []
    if background:
        inline.append(f"background:{background}")
    elif bg:
        inline.append(f"background:{_e(bg)}")
    if fg:
        inline.append(f"color:{_e(fg)}")
    inline.append(f"padding:{padding_css(s.padding)}")
    inline.append(f"text-align:{alignment_css(s.alignment)}")

    return f"""<section class="{" ".join(classes)}" id="{_e(b.id)}" style="{";".join(inline)}">
  <div class="block__inner">
{inner}
  </div>
</section>"""


def _header(cls: str, headline: str, subheadline: str = "") -> str:
    if not headline:
        return ""
    sub = f'<p class="{cls}__subtitle">{_e(subheadline)}</p>' if subheadline else ""
    return f'<div class="{cls}__header"><h2 class="{cls}__title">{_e(headline)}</h2>{sub}</div>'


# ── Renderers par variante ──────────────────────────────────────────────────

def render_hero_block(b: HeroBlock, theme: Theme) -> str:
    d = b.content

    # Image → overlay sombre ; sinon fond utilisateur ; sinon gradient primaire → sombre
    if d.background_image:
        background = (f"linear-gradient({HERO_OVERLAY}, {HERO_OVERLAY}), "
                      f"url('{_e(_css_url(d.background_image))}') center/cover")
        contrast   = DARK_BG
    elif b.styles.background_color:
        background, contrast = None, None
    else:
        background = f"linear-gradient(135deg, {_e(theme.primary_color)} 0%, {DARK_BG} 100%)"
        contrast   = DARK_BG

    cta = ""
    if d.cta_text:
        cta = f'\n    <a href="{_e(d.cta_url or "#")}" class="hero__cta btn btn-primary">{_e(d.cta_text)}</a>'

    inner = f"""  <div class="hero__content">
    <h1 class="hero__title">{_e(d.headline)}</h1>
    <p class="hero__subtitle">{_e(d.subheadline)}</p>{cta}
  </div>"""
    return _frame(b, inner, background=background, contrast_bg=contrast)


def render_text_block(b: TextBlock, theme: Theme) -> str:
    return _frame(b, f'  <div class="text-block__body">{b.content.text or ""}</div>')


def render_image_block(b: ImageBlock, theme: Theme) -> str:
    d = b.content
    if not d.url:
        return _frame(b, '  <div class="image-block__empty">No image selected</div>')
    caption = f'<figcaption class="image-block__caption">{_e(d.caption)}</figcaption>' if d.caption else ""
    inner = f"""  <figure class="image-block">
    <img src="{_e(d.url)}" alt="{_e(d.alt or "Image")}">
    {caption}
  </figure>"""
    return _frame(b, inner)


def render_cta_block(b: CTABlock, theme: Theme) -> str:
    d = b.content
    desc = f'<p class="cta-block__subtitle">{_e(d.description)}</p>' if d.description else ""
    btn  = f'<a href="{_e(d.button_url or "#")}" class="cta-block__btn">{_e(d.button_text)}</a>' if d.button_text else ""
    inner = f"""  <div class="cta-block">
    <h2 class="cta-block__title">{_e(d.headline)}</h2>
    {desc}
    {btn}
  </div>"""
    return _frame(b, inner, default_bg=DARK_BG)


def _feature_icon(icon: str) -> str:
    return icon if icon and len(icon) <= 4 else FEATURE_STAR


def render_features_block(b: FeaturesBlock, theme: Theme) -> str:
    d = b.content
    if d.features:
        items = "".join(f"""<div class="features__item">
  <div class="features__icon" style="color:{_e(theme.primary_color)}">{_e(_feature_icon(f.icon))}</div>
  <h3 class="features__item-title">{_e(f.title)}</h3>
  <p class="features__item-desc">{_e(f.description)}</p>
</div>""" for f in d.features)
        grid = f'<div class="features__grid">{items}</div>'
    else:
        grid = '<div class="features__empty">No features yet</div>'
    return _frame(b, f"  {_header('features', d.headline, d.subheadline)}\n  {grid}")


def render_testimonial_block(b: TestimonialBlock, theme: Theme) -> str:
    d = b.content
    avatar = f'<img src="{_e(d.avatar)}" alt="{_e(d.author)}" class="testimonial__avatar">' if d.avatar else ""
    role   = f'<div class="testimonial__role">{_e(d.role)}</div>' if d.role else ""
    inner = f"""  <div class="testimonial__card">
    {avatar}
    <blockquote class="testimonial__quote">"{_e(d.quote)}"</blockquote>
    <div class="testimonial__author">{_e(d.author)}</div>
    {role}
  </div>"""
    return _frame(b, inner)


def render_form_block(b: FormBlock, theme: Theme) -> str:
    d = b.content
    rows = []
    for field in d.fields:
        required = " required" if field.required else ""
        star     = '<span class="form-block__required"> *</span>' if field.required else ""
        if field.type == "textarea":
            control = f'<textarea name="{_e(field.name)}" placeholder="{_e(field.label)}" rows="4"{required}></textarea>'
        else:
            control = f'<input type="{_e(field.type or "text")}" name="{_e(field.name)}" placeholder="{_e(field.label)}"{required}>'
        rows.append(f"""<div class="form-block__field">
  <label>{_e(field.label)}{star}</label>
  {control}
</div>""")

    desc = f'<p class="form-block__description">{_e(d.description)}</p>' if d.description else ""
    title = f'<h2 class="form-block__title">{_e(d.headline)}</h2>' if d.headline else ""
    inner = f"""  {title}
  {desc}
  <form class="form-block" data-success-message="{_e(d.success_message)}">
    {"".join(rows)}
    <button type="submit" class="form-block__submit" style="background:{_e(theme.primary_color)};color:#fff">{_e(d.submit_button_text or "Submit")}</button>
  </form>"""
    return _frame(b, inner)


def render_pricing_block(b: PricingBlock, theme: Theme) -> str:
    d = b.content
    if not d.plans:
        grid = '<div class="pricing__empty">No plans yet</div>'
    else:
        cards = ""
        for plan in d.plans:
            featured = " pricing__card--featured" if plan.highlighted else ""
            border   = f' style="border-color:{_e(theme.primary_color)}"' if plan.highlighted else ""
            badge    = '<span class="pricing__badge">Most Popular</span>' if plan.highlighted else ""
            feats    = "".join(f"<li>✓ {_e(x)}</li>" for x in plan.features)
            cards += f"""<div class="pricing__card{featured}"{border}>
  {badge}
  <h3 class="pricing__name">{_e(plan.name)}</h3>
  <div class="pricing__price"><span>{_e(plan.price)}</span><span class="pricing__period">{_e(plan.period)}</span></div>
  <ul class="pricing__features">{feats}</ul>
  <a href="#enroll" class="pricing__cta">{_e(plan.button_text or "Get Started")}</a>
</div>"""
        grid = f'<div class="pricing__grid">{cards}</div>'
    return _frame(b, f"  {_header('pricing', d.headline, d.subheadline)}\n  {grid}")


def render_video_block(b: VideoBlock, theme: Theme) -> str:
    d = b.content
    url = d.url or (d.model_extra or {}).get("videoUrl") or ""
    if url:
        media = f"""<div class="video-block__frame">
    <iframe src="{_e(url)}" title="{_e(d.title or "Video")}" allowfullscreen></iframe>
  </div>"""
    elif d.thumbnail_url:
        media = f"""<div class="video-block__thumb">
    <img src="{_e(d.thumbnail_url)}" alt="Video thumbnail">
    <span class="video-block__play">{PLAY_GLYPH}</span>
  </div>"""
    else:
        media = ""
    return _frame(b, f"  {_header('video-block', d.title, d.description)}\n  {media}")


def render_gallery_block(b: GalleryBlock, theme: Theme) -> str:
    d = b.content
    if d.images:
        imgs = "".join(
            f'<img src="{_e(img.url)}" alt="{_e(img.alt or f"Gallery image {i}")}">'
            for i, img in enumerate(d.images, 1)
        )
        grid = f'<div class="gallery__grid">{imgs}</div>'
    else:
        grid = '<div class="gallery__empty">No images yet</div>'
    return _frame(b, f"  {_header('gallery', d.headline)}\n  {grid}")


def render_stats_block(b: StatsBlock, theme: Theme) -> str:
    d = b.content
    if d.stats:
        items = "".join(f"""<div class="stats__item">
  <div class="stats__value">{_e(s.value)}</div>
  <div class="stats__label">{_e(s.label)}</div>
</div>""" for s in d.stats)
        grid = f'<div class="stats__grid">{items}</div>'
    else:
        grid = '<div class="stats__empty">No stats yet</div>'
    return _frame(b, f"  {_header('stats', d.headline)}\n  {grid}", default_bg=theme.primary_color)
