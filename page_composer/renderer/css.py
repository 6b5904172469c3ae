"""
Générateur CSS — variables :root dérivées du thème + styles de base des blocs.

  generate_css_variables(theme)  →  :root { --color-primary: ...; ... }
  generate_theme_css(theme)      →  variables + CSS des blocs
"""
from ..core.colors import darken, lighten, parse_color, rgb_to_hex
from ..core.schemas import Theme
from .styles import ALIGNMENT, PADDING


def _variants(color: str) -> tuple[str, str, str]:
    """(base, light, dark) — couleur illisible → même valeur pour les trois."""
    rgb = parse_color(color)
    if rgb is None:
        return color, color, color
    base = rgb_to_hex(rgb)
    return base, lighten(base, 15), darken(base, 15)


def generate_css_variables(theme: Theme) -> str:
    p_base, p_light, p_dark = _variants(theme.primary_color)
    s_base, s_light, s_dark = _variants(theme.secondary_color)
    rgb = parse_color(theme.primary_color) or (59, 130, 246)

    return f""":root {{
  --color-primary:       {p_base};
  --color-primary-light: {p_light};
  --color-primary-dark:  {p_dark};
  --color-primary-rgb:   {rgb[0]}, {rgb[1]}, {rgb[2]};
  --color-secondary:       {s_base};
  --color-secondary-light: {s_light};
  --color-secondary-dark:  {s_dark};
  --color-text:       #0f172a;
  --color-text-light: #64748b;
  --color-bg:         #ffffff;
  --color-bg-gray:    #f8fafc;
  --color-border:     #e2e8f0;
  --border-radius:    {theme.radius_css};
  --font-family-body: {theme.font_family};
  --shadow-md: 0 4px 20px rgba(0,0,0,0.06);
}}"""


def _utility_classes() -> str:
    pads   = "\n".join(f".block--pad-{k} {{ padding: {v}; }}" for k, v in PADDING.items())
    aligns = "\n".join(f".block--align-{k} {{ text-align: {v}; }}" for k, v in ALIGNMENT.items())
    return pads + "\n" + aligns


_BASE_CSS = """
*, *::before, *::after { box-sizing: border-box; }
body { margin: 0; font-family: var(--font-family-body); color: var(--color-text); background: var(--color-bg); }
.block__inner { max-width: 1100px; margin: 0 auto; }
.btn, .cta-block__btn, .pricing__cta, .form-block__submit {
  display: inline-block; padding: 0.85rem 2rem; border-radius: var(--border-radius);
  font-weight: 700; text-decoration: none; border: none; cursor: pointer;
}
.btn-primary, .hero__cta { background: #fff; color: var(--color-primary); }
.cta-block__btn { background: #fff; color: var(--color-text); }
.hero__title { font-size: clamp(2rem, 5vw, 3.5rem); font-weight: 800; line-height: 1.15; }
.features__grid, .pricing__grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(280px, 1fr)); gap: 2rem; }
.features__item, .pricing__card, .testimonial__card {
  padding: 2rem; border-radius: var(--border-radius); background: var(--color-bg-gray);
  border: 1px solid var(--color-border); color: var(--color-text);
}
.pricing__card { position: relative; background: var(--color-bg); box-shadow: var(--shadow-md); }
.pricing__card--featured { border-width: 2px; transform: scale(1.03); }
.pricing__badge {
  position: absolute; top: -12px; left: 50%; transform: translateX(-50%);
  background: var(--color-primary); color: #fff; padding: 0.25rem 1rem; border-radius: 20px; font-size: 0.8rem;
}
.pricing__features { list-style: none; padding: 0; }
.stats__grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(140px, 1fr)); gap: 2rem; }
.stats__value { font-size: clamp(2rem, 4vw, 3rem); font-weight: 800; }
.gallery__grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(250px, 1fr)); gap: 1rem; }
.gallery__grid img { width: 100%; height: 240px; object-fit: cover; border-radius: var(--border-radius); }
.image-block img { width: 100%; border-radius: var(--border-radius); }
.video-block__frame { position: relative; padding-bottom: 56.25%; height: 0; overflow: hidden; }
.video-block__frame iframe { position: absolute; inset: 0; width: 100%; height: 100%; border: none; }
.video-block__thumb { position: relative; }
.video-block__play { position: absolute; inset: 0; display: flex; align-items: center; justify-content: center; font-size: 2rem; }
.form-block { display: flex; flex-direction: column; gap: 1rem; max-width: 520px; margin: 0 auto; }
.form-block input, .form-block textarea { width: 100%; padding: 0.75rem 1rem; border: 1px solid #d1d5db; border-radius: 8px; }
.testimonial__avatar { width: 64px; height: 64px; border-radius: 50%; object-fit: cover; }
"""


def generate_theme_css(theme: Theme) -> str:
    """CSS complet : variables du thème + utilitaires padding/alignement + blocs."""
    return generate_css_variables(theme) + "\n" + _utility_classes() + _BASE_CSS
