# mcp_browser_sessions/cleaners.py

import re
from typing import Dict, List, Optional, Tuple

import bs4

NOISE_ID_CLASS_PAT = re.compile(
    r"(gtm|gtag|analytics|\bads?\b|adslot|sponsor|cookie[-_ ]?banner|chat[-_ ]?widget)",
    re.I
)

HIDDEN_CLASS_PAT = re.compile(r"(sr-only|visually-hidden|offscreen)", re.I)

WORD_PAT = re.compile(r"[a-z0-9]+", re.I)

INTERACTIVE_TAGS = ["a", "button", "input", "select", "textarea"]


def _remove_comments(soup, pruned_counts: Dict[str, int]) -> None:
    """
    Remove HTML comments from the document to save tokens.

    Args:
        soup: BeautifulSoup object to modify in-place
        pruned_counts: Dictionary to update with removal counts
    """
    for c in soup.find_all(string=lambda t: isinstance(t, bs4.Comment)):
        c.extract()
        pruned_counts["comments_removed"] += 1


def _remove_scripts_and_styles(soup, pruned_counts: Dict[str, int]) -> None:
    """Remove non-content tags like scripts, styles, SVG and non-canonical links."""
    for tag_name in ["script", "style", "noscript", "template", "canvas", "svg", "meta", "source", "track"]:
        removed = soup.find_all(tag_name)
        key = tag_name if tag_name in ["script", "style"] else "noise"
        pruned_counts[key] = pruned_counts.get(key, 0) + len(removed)
        for t in removed:
            t.decompose()

    # Remove <link> except canonical (robust to str vs list)
    for link in soup.find_all("link"):
        rel = link.get("rel")
        rels = [s.lower() for s in rel] if isinstance(rel, (list, tuple)) else ([str(rel).lower()] if rel else [])
        if "canonical" in rels:
            continue
        pruned_counts["noise"] += 1
        link.decompose()


def _is_hidden(el) -> bool:
    classes = el.get("class") or []
    classv = " ".join(classes) if isinstance(classes, (list, tuple)) else str(classes)

    aria_hidden = str(el.get("aria-hidden", "")).strip().lower() == "true"
    style_hidden = False
    style_val = el.get("style")
    if isinstance(style_val, str):
        sv = style_val.lower()
        if re.search(r"display\s*:\s*none\b", sv) or re.search(r"visibility\s*:\s*hidden\b", sv):
            style_hidden = True

    return bool(el.has_attr("hidden") or aria_hidden or style_hidden or HIDDEN_CLASS_PAT.search(classv))


def _remove_noise_containers(soup, pruned_counts: Dict[str, int], prune_hidden: bool) -> None:
    """
    Remove ads, trackers and hidden elements.

    Args:
        soup: BeautifulSoup object to modify in-place
        pruned_counts: Dictionary to update with removal counts
        prune_hidden: If True, remove hidden elements and hidden inputs
    """
    removed_noise = 0
    removed_hidden = 0

    for el in soup.find_all(True):
        # Already detached together with a removed ancestor
        if el.attrs is None:
            continue

        idv = el.get("id") or ""
        classes = el.get("class") or []
        classv = " ".join(classes) if isinstance(classes, (list, tuple)) else str(classes)

        remove_for_noise = bool(NOISE_ID_CLASS_PAT.search(idv) or NOISE_ID_CLASS_PAT.search(classv))
        remove_for_hidden = prune_hidden and _is_hidden(el)

        if remove_for_noise or remove_for_hidden:
            if remove_for_noise:
                removed_noise += 1
            else:
                removed_hidden += 1
            el.decompose()

    pruned_counts["noise"] += removed_noise
    pruned_counts["hidden_removed"] += removed_hidden

    if prune_hidden:
        for inp in soup.find_all("input"):
            if str(inp.get("type", "")).lower() == "hidden":
                inp.decompose()
                pruned_counts["hidden_removed"] += 1


def basic_prune(html: str, level: int = 1, prune_hidden: bool = True) -> Tuple[bs4.BeautifulSoup, Dict[str, int]]:
    """
    Perform structural pruning on raw HTML to remove non-content noise.

    Args:
        html: Raw HTML string.
        level: Cleaning level. 0 drops scripts/styles/comments only, 1 also
            drops ad/tracker containers and (optionally) hidden elements.
        prune_hidden: If True, remove hidden elements and <input type="hidden">.

    Returns:
        The pruned soup and a dict of removal counts.
    """
    pruned_counts = {
        "script": 0,
        "style": 0,
        "noise": 0,
        "hidden_removed": 0,
        "comments_removed": 0,
    }

    soup = bs4.BeautifulSoup(html or "", "html.parser")

    _remove_comments(soup, pruned_counts)
    _remove_scripts_and_styles(soup, pruned_counts)

    if level >= 1:
        _remove_noise_containers(soup, pruned_counts, prune_hidden)

    return soup, pruned_counts


def _normalize_text(text: str) -> str:
    lines = [re.sub(r"[ \t\r\f\v]+", " ", ln).strip() for ln in text.splitlines()]
    return "\n".join(ln for ln in lines if ln)


def extract_text(html: str, selector: Optional[str] = None, max_chars: Optional[int] = None) -> Tuple[str, bool]:
    """
    Return the visible text of a page, or of the elements matching a CSS selector.

    Returns:
        (text, truncated) where truncated is True if max_chars cut the text.
    """
    soup, _ = basic_prune(html, level=1)

    if selector:
        nodes = soup.select(selector)
        chunks = [n.get_text("\n", strip=True) for n in nodes]
        text = "\n\n".join(c for c in chunks if c)
    else:
        root = soup.body or soup
        text = root.get_text("\n", strip=True)

    text = _normalize_text(text)
    if max_chars is not None and len(text) > max_chars:
        return text[:max_chars], True
    return text, False


def css_path(el) -> str:
    """Build a rough CSS path for an element, stopping at the first id."""
    parts = []
    cur = el
    while cur is not None and cur.name and cur.name != "[document]":
        if cur.has_attr("id"):
            parts.append(f"{cur.name}#{cur['id']}")
            break
        part = cur.name
        parent = cur.parent
        if parent is not None:
            same = parent.find_all(cur.name, recursive=False)
            if len(same) > 1:
                position = next(i for i, s in enumerate(same) if s is cur)
                part += f":nth-of-type({position + 1})"
        parts.append(part)
        cur = parent
    return " > ".join(reversed(parts))


def _suggested_method(el) -> str:
    if el.name in ("input", "textarea"):
        typ = str(el.get("type", "text")).lower()
        if typ in ("submit", "button", "checkbox", "radio", "reset", "image"):
            return "click"
        return "type"
    if el.name == "select":
        return "select"
    return "click"


def _describe(el) -> str:
    text = el.get_text(" ", strip=True)
    if not text:
        for attr in ("aria-label", "placeholder", "title", "value", "name", "alt"):
            val = el.get(attr)
            if val:
                text = str(val)
                break
    role = el.get("role") or el.name
    return f"{role}: {text}" if text else str(role)


def extract_interactives(html: str, instruction: str = "", max_items: Optional[int] = None) -> List[dict]:
    """
    Catalog interactive elements of a page.

    Each entry carries a description, a CSS selector and the suggested method.
    Elements sharing words with the instruction are ranked first; document
    order is kept otherwise.
    """
    soup, _ = basic_prune(html, level=1)
    wanted = {w.lower() for w in WORD_PAT.findall(instruction or "")}

    found = []
    seen = set()
    for el in soup.find_all(lambda t: t.name in INTERACTIVE_TAGS or t.get("role") == "button"):
        if el.name == "a" and not el.get("href"):
            continue
        selector = css_path(el)
        if selector in seen:
            continue
        seen.add(selector)
        description = _describe(el)
        score = len(wanted & {w.lower() for w in WORD_PAT.findall(description)})
        found.append((score, len(found), {
            "description": description,
            "selector": selector,
            "method": _suggested_method(el),
        }))

    found.sort(key=lambda item: (-item[0], item[1]))
    items = [entry for _, _, entry in found]
    if max_items is not None:
        items = items[:max_items]
    return items


__all__ = [
    "basic_prune",
    "extract_text",
    "css_path",
    "extract_interactives",
]
