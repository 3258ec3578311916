from __future__ import annotations

import unicodedata

_TO_LATIN = {
    "а": "a",
    "б": "b",
    "в": "v",
    "г": "g",
    "д": "d",
    "е": "e",
    "ё": "e",
    "ж": "zh",
    "з": "z",
    "и": "i",
    "й": "y",
    "к": "k",
    "л": "l",
    "м": "m",
    "н": "n",
    "о": "o",
    "п": "p",
    "р": "r",
    "с": "s",
    "т": "t",
    "у": "u",
    "ф": "f",
    "х": "h",
    "ц": "ts",
    "ч": "ch",
    "ш": "sh",
    "щ": "sch",
    "ъ": "",
    "ы": "y",
    "ь": "",
    "э": "e",
    "ю": "yu",
    "я": "ya",
    # Latin letters that NFKD does not decompose
    "ß": "ss",
    "æ": "ae",
    "œ": "oe",
    "ø": "o",
    "ł": "l",
    "đ": "d",
    "ð": "d",
    "þ": "th",
    "ı": "i",
}


def slugify(value: str | None) -> str:
    """Turn free text into a lowercase, hyphen-separated URL token.

    Cyrillic and a few Latin letters are transliterated, accented letters
    lose their marks, other non-ASCII letters and digits (CJK, Greek, ...)
    are dropped, and anything else acts as a separator. Never raises; text
    with no usable characters yields ``""``.
    """
    raw = str(value or "").strip().lower()
    if not raw:
        return ""
    latin = "".join(_TO_LATIN.get(ch, ch) for ch in raw)
    decomposed = unicodedata.normalize("NFKD", latin).lower()
    out: list[str] = []
    prev_dash = False
    for ch in decomposed:
        if unicodedata.combining(ch):
            continue
        if ("a" <= ch <= "z") or ("0" <= ch <= "9"):
            out.append(ch)
            prev_dash = False
            continue
        if unicodedata.category(ch)[0] in "LN":
            continue
        if not prev_dash:
            out.append("-")
            prev_dash = True
    return "".join(out).strip("-")
