"""
Extraction heuristique de blocs depuis du HTML brut (import « coller du code »).

Règles indépendantes et cumulatives, appliquées dans cet ordre :
  1. chaque <h1>            → hero (le <p> frère immédiatement suivant = sous-titre)
  2. chaque <img>           → image (URL ajoutée à image_urls)
  3. chaque <p> > 20 car.   → text
  4. au moins un bouton     → un seul cta, libellé = texte du premier bouton
  5. chaque <ul>/<ol> ≥ 3   → features (6 entrées max, icônes 🚀 ⚡ 🎯 en boucle)

Un même sous-arbre peut alimenter plusieurs règles. Le HTML malformé ne
lève jamais : une règle sans correspondance produit simplement zéro bloc.
"""
import copy
import logging
from html import escape
from itertools import cycle
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag
from pydantic import BaseModel, Field, SerializeAsAny

from ..blocks import BaseBlock, parse_block
from ..blocks.base import DEFAULT_STYLES, new_block_id

log = logging.getLogger(__name__)

MIN_TEXT_LENGTH   = 20
MIN_LIST_ITEMS    = 3
MAX_FEATURE_ITEMS = 6
TITLE_MAX_LENGTH  = 50
FEATURE_ICONS     = ["🚀", "⚡", "🎯"]

BUTTON_SELECTOR = ", ".join([
    "button",
    "input[type=submit]",
    "input[type=button]",
    "[role=button]",
    "a.btn",
    "a.button",
    "a[class*=btn]",
    "a[class*=button]",
])


class ExtractionResult(BaseModel):
    blocks: List[SerializeAsAny[BaseBlock]] = Field(default_factory=list)
    image_urls: List[str] = Field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.blocks


def _block(block_type: str, content: dict) -> BaseBlock:
    return parse_block({
        "id": new_block_id(),
        "type": block_type,
        "content": content,
        "styles": copy.deepcopy(DEFAULT_STYLES),
    })


def _text(el: Tag) -> str:
    return " ".join(el.get_text(" ", strip=True).split())


def _own_text(li: Tag, owner: Tag) -> str:
    """Texte d'un <li> sans celui des listes imbriquées."""
    parts = [s for s in li.find_all(string=True) if s.find_parent(["ul", "ol"]) is owner]
    return " ".join(" ".join(parts).split())


# ── Règles ──────────────────────────────────────────────────────────────────

def _heroes(soup: BeautifulSoup) -> List[BaseBlock]:
    blocks = []
    for h1 in soup.find_all("h1"):
        sibling = h1.find_next_sibling()
        subheadline = _text(sibling) if sibling is not None and sibling.name == "p" else ""
        blocks.append(_block("hero", {
            "headline": _text(h1),
            "subheadline": subheadline,
            "ctaText": "",
            "ctaUrl": "#",
            "backgroundImage": "",
        }))
    return blocks


def _images(soup: BeautifulSoup, base_url: Optional[str], image_urls: List[str]) -> List[BaseBlock]:
    blocks = []
    for img in soup.find_all("img"):
        src = (img.get("src") or "").strip()
        if not src:
            continue
        url = urljoin(base_url, src) if base_url else src
        if url not in image_urls:
            image_urls.append(url)
        blocks.append(_block("image", {"url": url, "alt": img.get("alt") or "", "caption": ""}))
    return blocks


def _paragraphs(soup: BeautifulSoup) -> List[BaseBlock]:
    blocks = []
    for p in soup.find_all("p"):
        text = _text(p)
        if len(text) > MIN_TEXT_LENGTH:
            blocks.append(_block("text", {"text": f"<p>{escape(text)}</p>"}))
    return blocks


def _cta(soup: BeautifulSoup, base_url: Optional[str]) -> List[BaseBlock]:
    button = soup.select_one(BUTTON_SELECTOR)
    if button is None:
        return []
    if button.name == "input":
        label = (button.get("value") or "").strip()
    else:
        label = _text(button)
    href = button.get("href") if button.name == "a" else None
    if href and base_url:
        href = urljoin(base_url, href)
    return [_block("cta", {
        "headline": "Ready to Get Started?",
        "description": "",
        "buttonText": label or "Get Started",
        "buttonUrl": href or "#",
    })]


def _features(soup: BeautifulSoup) -> List[BaseBlock]:
    blocks = []
    for lst in soup.find_all(["ul", "ol"]):
        items = [li for li in lst.find_all("li") if li.find_parent(["ul", "ol"]) is lst]
        if len(items) < MIN_LIST_ITEMS:
            continue
        icons = cycle(FEATURE_ICONS)
        features = []
        for li in items[:MAX_FEATURE_ITEMS]:
            text = _own_text(li, lst)
            features.append({"title": text[:TITLE_MAX_LENGTH], "description": text, "icon": next(icons)})
        blocks.append(_block("features", {"headline": "Features", "subheadline": "", "features": features}))
    return blocks


# ── Point d'entrée ──────────────────────────────────────────────────────────

def extract_blocks(markup: Optional[str], base_url: Optional[str] = None) -> ExtractionResult:
    """Blocs extraits de `markup` dans l'ordre des règles ; résultat vide si rien ne correspond."""
    if not isinstance(markup, str) or not markup.strip():
        return ExtractionResult()

    soup = BeautifulSoup(markup, "html.parser")
    image_urls: List[str] = []
    blocks = (
        _heroes(soup)
        + _images(soup, base_url, image_urls)
        + _paragraphs(soup)
        + _cta(soup, base_url)
        + _features(soup)
    )
    log.info("Extraction HTML : %s blocs, %s images", len(blocks), len(image_urls))
    return ExtractionResult(blocks=blocks, image_urls=image_urls)
